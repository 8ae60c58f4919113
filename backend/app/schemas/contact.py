"""Contact Schemas — Pydantic models for the stored record and the write payload.

Invariants:
    - ContactInput rejects empty name/phone and malformed email
    - email is stored exactly as sent: no normalization, no "Name <addr>" extraction
    - ContactInput ignores unknown keys (a client-sent id never reaches the store)
    - Contact carries no write-time constraints: stored records load as-is
    - validate_contact_input raises ContactValidationError with every violation, never a subset

Design Decisions:
    - strict=True on ContactInput: no coercion of 1 -> "1" or "true" -> True
    - bookmarked default lives on ContactInput so exclude_unset can tell
      "omitted" from "sent" during update merges
"""

from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from app.core.errors import ContactValidationError
from app.core.validation_messages import format_validation_errors


class ContactInput(BaseModel):
    """Create/update payload — same full shape for both."""
    model_config = ConfigDict(strict=True, extra="ignore")

    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: str
    bookmarked: StrictBool = False

    @field_validator("email")
    @classmethod
    def check_bare_address(cls, v: str) -> str:
        """Syntax check only: display-name forms rejected, value stored exactly as sent."""
        if "<" in v or ">" in v:
            raise ValueError("email must be a bare address")
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return v


class Contact(BaseModel):
    """Stored contact record."""
    id: str
    name: str
    phone: str
    email: str
    bookmarked: bool = False


def validate_contact_input(data: Any) -> ContactInput:
    """Validate a raw payload or raise ContactValidationError."""
    try:
        return ContactInput.model_validate(data)
    except ValidationError as e:
        raise ContactValidationError(format_validation_errors(e.errors()))
