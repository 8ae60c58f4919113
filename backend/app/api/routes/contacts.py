"""Contacts CRUD — thin routes over ContactStore.

Invariants:
    - Store is injected via get_contact_store (overridden in tests), never imported as a global
    - Request bodies reach the store raw: validation and its error shape live in one place
    - PATCH requires the full create shape (name, phone, email); only bookmarked may be omitted
    - Not-found and validation failures propagate as ContactsError to the global handler

Design Decisions:
    - Body typed as dict, not ContactInput: a pydantic-typed body would validate twice
      and produce "body.name" locations (ADR: single validation path)
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status

from app.infrastructure.contact_store import ContactStore, get_contact_store
from app.schemas.contact import Contact

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=list[Contact])
async def list_contacts(store: ContactStore = Depends(get_contact_store)):
    """Return every contact in stored order."""
    return await store.list()


@router.get("/{contact_id}", response_model=Contact)
async def get_contact(
    contact_id: str, store: ContactStore = Depends(get_contact_store),
):
    return await store.get(contact_id)


@router.post(
    "", response_model=Contact, status_code=status.HTTP_201_CREATED,
)
async def create_contact(
    payload: dict[str, Any] = Body(...),
    store: ContactStore = Depends(get_contact_store),
):
    """Create a contact with a server-generated id."""
    return await store.create(payload)


@router.patch("/{contact_id}", response_model=Contact)
async def update_contact(
    contact_id: str,
    payload: dict[str, Any] = Body(...),
    store: ContactStore = Depends(get_contact_store),
):
    return await store.update(contact_id, payload)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: str, store: ContactStore = Depends(get_contact_store),
):
    await store.delete(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
