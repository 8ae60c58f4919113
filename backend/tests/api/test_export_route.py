"""Export route — zip download of every contact as <id>.vcf.

Invariants:
    - 200, application/zip, attachment filename contacts.zip
    - One entry per contact, named by id, vCard text inside
    - Zero contacts → valid empty archive, not an error
    - Failure before streaming → 500 {"message": "Error exporting contacts"}
    - Failure after streaming started → stream aborted, no JSON body
"""

import io
import zipfile

import pytest

import app.services.export_contacts as export_module
from app.core.vcard import render_vcard

ANN = {"id": "a", "name": "Ann", "phone": "1", "email": "a@x.com", "bookmarked": False}
BOB = {"id": "b", "name": "Bob", "phone": "2", "email": "b@x.com", "bookmarked": True}
EXPORT_FAILED = {"message": "Error exporting contacts"}


def _open_zip(content: bytes) -> zipfile.ZipFile:
    archive = zipfile.ZipFile(io.BytesIO(content))
    assert archive.testzip() is None
    return archive


async def test_export_single_contact(client, seed_contacts):
    seed_contacts(ANN)
    res = await client.get("/contacts/export")

    assert res.status_code == 200
    assert res.headers["content-type"] == "application/zip"
    assert res.headers["content-disposition"] == "attachment; filename=contacts.zip"

    archive = _open_zip(res.content)
    assert archive.namelist() == ["a.vcf"]
    lines = archive.read("a.vcf").decode("utf-8").splitlines()
    assert lines[0] == "BEGIN:VCARD"
    assert lines[-1] == "END:VCARD"
    assert "FN:Ann" in lines
    assert "TEL:1" in lines
    assert "EMAIL:a@x.com" in lines


async def test_export_one_entry_per_contact_in_order(client, seed_contacts):
    seed_contacts(ANN, BOB)
    res = await client.get("/contacts/export")
    archive = _open_zip(res.content)
    assert archive.namelist() == ["a.vcf", "b.vcf"]
    assert "FN:Bob" in archive.read("b.vcf").decode("utf-8")


async def test_export_entries_are_deflated(client, seed_contacts):
    seed_contacts(ANN)
    res = await client.get("/contacts/export")
    info = _open_zip(res.content).getinfo("a.vcf")
    assert info.compress_type == zipfile.ZIP_DEFLATED


async def test_export_with_no_contacts_returns_empty_archive(client):
    res = await client.get("/contacts/export")
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/zip"
    assert _open_zip(res.content).namelist() == []


async def test_export_path_is_not_treated_as_contact_id(client, seed_contacts):
    seed_contacts(ANN)
    res = await client.get("/contacts/export")
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/zip"


async def test_export_includes_contacts_created_through_api(client):
    created = (await client.post(
        "/contacts", json={"name": "Cy", "phone": "3", "email": "c@x.com"},
    )).json()
    res = await client.get("/contacts/export")
    assert _open_zip(res.content).namelist() == [f"{created['id']}.vcf"]


async def test_export_returns_500_when_store_is_unreadable(client, contacts_path):
    contacts_path.write_text("{not json", encoding="utf-8")
    res = await client.get("/contacts/export")
    assert res.status_code == 500
    assert res.json() == EXPORT_FAILED


async def test_export_returns_500_when_first_entry_fails(client, seed_contacts, monkeypatch):
    seed_contacts(ANN)

    def _fail(contact):
        raise RuntimeError("render failed")

    monkeypatch.setattr(export_module, "render_vcard", _fail)
    res = await client.get("/contacts/export")
    assert res.status_code == 500
    assert res.json() == EXPORT_FAILED


async def test_export_aborts_stream_when_later_entry_fails(
    raising_client, seed_contacts, monkeypatch,
):
    seed_contacts(ANN, BOB)

    def _fail_on_bob(contact):
        if contact.id == "b":
            raise RuntimeError("render failed mid-stream")
        return render_vcard(contact)

    monkeypatch.setattr(export_module, "render_vcard", _fail_on_bob)
    with pytest.raises(Exception):
        await raising_client.get("/contacts/export")
