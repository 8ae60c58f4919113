"""Contact Store — flat JSON file persistence for the full contact collection.

Invariants:
    - Every mutation is a full read-modify-write of the whole file
    - Mutations are serialized by one asyncio.Lock held across the whole cycle
    - Input is validated before the file is read: a rejected write never touches storage
    - Missing file is initialized to [] before first use
    - OSError / malformed JSON mapped to StorageError (core/errors.py)

Design Decisions:
    - File IO via asyncio.to_thread: event loop never blocks on disk, but handlers
      suspend mid-cycle, hence the lock (ADR: no lost updates between PATCH/DELETE)
    - Reads take no lock: list/get/export may observe either side of a concurrent write
    - Singleton contact_store initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
"""

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from app.core.errors import ContactNotFoundError, StorageError
from app.schemas.contact import Contact, validate_contact_input

logger = logging.getLogger(__name__)

# Alias keeps annotations valid inside ContactStore, where `list` is a method
ContactList = list[Contact]
_collection_adapter = TypeAdapter(ContactList)


class ContactStore:
    """Sole owner of the backing file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = asyncio.Lock()

    # -- public operations ---------------------------------------------------

    async def list(self) -> ContactList:
        return await self._read()

    async def get(self, contact_id: str) -> Contact:
        for contact in await self._read():
            if contact.id == contact_id:
                return contact
        raise ContactNotFoundError(contact_id)

    async def create(self, fields: Any) -> Contact:
        validated = validate_contact_input(fields)
        contact = Contact(id=str(uuid.uuid4()), **validated.model_dump())
        async with self._lock:
            contacts = await self._read()
            contacts.append(contact)
            await self._write(contacts)
        logger.info("Contact created", extra={"contact_id": contact.id})
        return contact

    async def update(self, contact_id: str, fields: Any) -> Contact:
        """Full-shape validation, then merge over the stored record.

        Fields the caller omitted (only bookmarked can be) keep their stored value.
        """
        validated = validate_contact_input(fields)
        changes = validated.model_dump(exclude_unset=True)
        async with self._lock:
            contacts = await self._read()
            index = next(
                (i for i, c in enumerate(contacts) if c.id == contact_id), None,
            )
            if index is None:
                raise ContactNotFoundError(contact_id)
            updated = contacts[index].model_copy(update=changes)
            contacts[index] = updated
            await self._write(contacts)
        logger.info("Contact updated", extra={"contact_id": contact_id})
        return updated

    async def delete(self, contact_id: str) -> None:
        async with self._lock:
            contacts = await self._read()
            remaining = [c for c in contacts if c.id != contact_id]
            if len(remaining) == len(contacts):
                raise ContactNotFoundError(contact_id)
            await self._write(remaining)
        logger.info("Contact deleted", extra={"contact_id": contact_id})

    # -- file IO ---------------------------------------------------------------

    async def ensure_initialized(self) -> None:
        """Create the backing file as [] if it does not exist yet."""
        try:
            await asyncio.to_thread(self._ensure_file_sync)
        except OSError as e:
            logger.error(f"Contact store init failed: {e}", exc_info=True)
            raise StorageError(str(e), "init")

    async def _read(self) -> ContactList:
        try:
            return await asyncio.to_thread(self._read_sync)
        except (OSError, ValueError, ValidationError) as e:
            logger.error(
                f"Contact store read failed: {e}",
                extra={"operation": "read"}, exc_info=True,
            )
            raise StorageError(str(e), "read")

    async def _write(self, contacts: ContactList) -> None:
        try:
            await asyncio.to_thread(self._write_sync, contacts)
        except OSError as e:
            logger.error(
                f"Contact store write failed: {e}",
                extra={"operation": "write"}, exc_info=True,
            )
            raise StorageError(str(e), "write")

    def _ensure_file_sync(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")

    def _read_sync(self) -> ContactList:
        self._ensure_file_sync()
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        return _collection_adapter.validate_python(raw)

    def _write_sync(self, contacts: ContactList) -> None:
        data = [c.model_dump() for c in contacts]
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# Singleton (initialized on startup)
contact_store: ContactStore | None = None


def init_store(path: str | Path) -> ContactStore:
    global contact_store
    contact_store = ContactStore(path)
    return contact_store


def get_contact_store() -> ContactStore:
    """FastAPI dependency for the contact store."""
    if not contact_store:
        raise RuntimeError("Contact store not initialized")
    return contact_store
