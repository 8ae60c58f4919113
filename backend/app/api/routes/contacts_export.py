"""Contacts Export — streams every contact as <id>.vcf inside contacts.zip.

Invariants:
    - Registered before the contacts router: /contacts/export is never read as an id
    - Failures before the first byte → 500 {"message": "Error exporting contacts"}
    - Failures after the response started are logged and re-raised (server aborts the
      connection); no JSON body is ever written into a started zip response
    - No store lock held while streaming

Design Decisions:
    - First archive chunk produced before StreamingResponse is returned: store reads and the
      first entry fail as a clean 500 instead of a truncated download
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from app.config import get_settings
from app.core.errors import ExportError
from app.infrastructure.contact_store import ContactStore, get_contact_store
from app.services.export_contacts import ArchiveStream, stream_contacts_archive

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/contacts", tags=["contacts"])

EXPORT_HEADERS = {
    "Content-Disposition": "attachment; filename=contacts.zip",
}


async def _guarded(stream: ArchiveStream):
    try:
        async for chunk in stream:
            yield chunk
    except Exception as e:
        logger.error(
            f"Export failed mid-stream: {e}",
            extra={"error_code": "EXPORT_ERROR"}, exc_info=True,
        )
        raise


@router.get("/export")
async def export_contacts(store: ContactStore = Depends(get_contact_store)):
    """Download all contacts as a zip of vCards."""
    settings = get_settings()
    try:
        contacts = await store.list()
        stream = ArchiveStream(stream_contacts_archive(
            contacts,
            work_root=settings.export_work_dir,
            compression_level=settings.export_compression_level,
        ))
        await stream.prime()
    except Exception as e:
        logger.error(
            f"Export error: {e}",
            extra={"error_code": "EXPORT_ERROR"}, exc_info=True,
        )
        # prime() never hands bytes to the response: nothing has started yet
        error = ExportError()
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )

    return StreamingResponse(
        _guarded(stream),
        media_type="application/zip",
        headers=EXPORT_HEADERS,
    )
