"""Error Hierarchy — typed, categorized exceptions for all contacts API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST body the API contract promises
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ContactsError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Response bodies are flat ({"message"} / {"errors"}), not an envelope (ADR: client contract)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    EXPORT = "export"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    contact_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ContactsError(Exception):
    """Base exception for all contacts API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        return {"message": self.message}

    def log_extra(self) -> dict:
        """Structured fields for logger.* extra=."""
        return {
            "error_code": self.code,
            "contact_id": self.context.contact_id,
            "operation": self.context.operation,
            "debug_info": self.context.debug_info,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ContactValidationError(ContactsError):
    """One or more contact field constraints violated."""
    def __init__(self, errors: list[dict], context: ErrorContext | None = None):
        super().__init__(
            f"{len(errors)} field constraint(s) violated",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        return {"errors": self.errors}


class ContactNotFoundError(ContactsError):
    """Lookup by id found no contact."""
    def __init__(self, contact_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.contact_id = contact_id
        super().__init__(
            "Contact not found",
            "CONTACT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )
        self.contact_id = contact_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(ContactsError):
    """Reading or writing the backing file failed."""
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.debug_info = {"detail": detail}
        super().__init__(
            "Server error",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.detail = detail


class ExportError(ContactsError):
    """Archive could not be produced before streaming started."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Error exporting contacts",
            "EXPORT_ERROR", ErrorCategory.EXPORT,
            ErrorSeverity.CRITICAL, context, 500,
        )
