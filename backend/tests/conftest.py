"""Root conftest — shared test configuration and store fixtures."""

import json
import os

import pytest

# Keep test runs off the real backing file and out of JSON log noise
os.environ.setdefault("CONTACTS_CONTACTS_FILE", "test-contacts.json")
os.environ.setdefault("CONTACTS_LOG_FORMAT", "text")

from app.infrastructure.contact_store import ContactStore  # noqa: E402


@pytest.fixture
def contacts_path(tmp_path):
    return tmp_path / "contacts.json"


@pytest.fixture
def store(contacts_path):
    """Fresh store over a file that does not exist yet."""
    return ContactStore(contacts_path)


@pytest.fixture
def seed_contacts(contacts_path):
    """Write records straight to the backing file (bypasses validation)."""
    def _seed(*records: dict) -> list[dict]:
        contacts_path.write_text(json.dumps(list(records), indent=2), encoding="utf-8")
        return list(records)
    return _seed
