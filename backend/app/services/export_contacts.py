"""Contact Export — vCard-per-contact zip archive, produced incrementally for streaming.

Invariants:
    - Archive bytes never touch disk: ZipFile writes into an in-memory sink drained per entry
    - Memory holds at most one compressed entry (plus the central directory at the end)
    - Zero contacts yields a valid zero-entry archive, never an error
    - The transient working directory is removed on every exit path
      (success, exception, generator close on client disconnect)
    - ArchiveStream.started flips True before the first byte leaves the pipeline

Design Decisions:
    - stdlib zipfile over a non-seekable sink: ZipFile falls back to data descriptors
      and tracks offsets itself, so entries can be emitted before the archive is complete
    - ArchiveStream wraps the generator so the route can ask "has the response started?"
      before choosing between a JSON 500 and aborting the stream
"""

import logging
import tempfile
import zipfile
from collections.abc import AsyncIterator, Iterable

from app.core.vcard import render_vcard, vcard_filename
from app.schemas.contact import Contact

logger = logging.getLogger(__name__)

MAX_COMPRESSION_LEVEL = 9
WORK_DIR_PREFIX = "contacts-export-"


class _ChunkSink:
    """Write-only, non-seekable byte sink. ZipFile sees no tell()/seek()."""

    def __init__(self):
        self._chunks: list[bytes] = []

    def write(self, data) -> int:
        self._chunks.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        pass

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks.clear()
        return data


class ZipStreamWriter:
    """Incremental zip writer: add_entry()/finalize() return the bytes they produced."""

    def __init__(self, compression_level: int = MAX_COMPRESSION_LEVEL):
        self._sink = _ChunkSink()
        self._zip = zipfile.ZipFile(
            self._sink, mode="w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=compression_level,
        )
        self.entries = 0
        self.finalized = False

    def add_entry(self, name: str, content: str) -> bytes:
        if self.finalized:
            raise RuntimeError("Archive already finalized")
        self._zip.writestr(name, content.encode("utf-8"))
        self.entries += 1
        return self._sink.drain()

    def finalize(self) -> bytes:
        """Write central directory + end-of-archive record."""
        if not self.finalized:
            self._zip.close()
            self.finalized = True
        return self._sink.drain()


async def stream_contacts_archive(
    contacts: Iterable[Contact],
    work_root: str | None = None,
    compression_level: int = MAX_COMPRESSION_LEVEL,
) -> AsyncIterator[bytes]:
    """Yield the zip archive for contacts, one chunk per entry plus the trailer."""
    with tempfile.TemporaryDirectory(prefix=WORK_DIR_PREFIX, dir=work_root):
        writer = ZipStreamWriter(compression_level)
        for contact in contacts:
            chunk = writer.add_entry(vcard_filename(contact), render_vcard(contact))
            if chunk:
                yield chunk
        yield writer.finalize()
        logger.info("Contacts exported", extra={"entries": writer.entries})


class ArchiveStream:
    """Async iterator over archive chunks that records whether output has begun."""

    def __init__(self, chunks: AsyncIterator[bytes]):
        self._chunks = chunks
        self._primed: bytes | None = None
        self.started = False

    async def prime(self) -> None:
        """Produce the first chunk now, so early failures surface before any response."""
        self._primed = await self._chunks.__anext__()

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[bytes]:
        try:
            if self._primed is not None:
                self.started = True
                yield self._primed
                self._primed = None
            async for chunk in self._chunks:
                self.started = True
                yield chunk
        finally:
            await self._chunks.aclose()
