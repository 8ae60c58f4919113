"""Error Handlers — global exception handlers for the contacts API.

Invariants:
    - ContactsError → its own to_response() body and http_status
    - RequestValidationError → 400 {"errors": [...]}, same entries as store-level validation
    - Exception (catch-all) → 500 {"message": "Server error"}, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (ContactsError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so tests and main share one registration path
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import ContactsError, ErrorSeverity
from app.core.validation_messages import format_validation_errors

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_contacts_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_contacts_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ContactsError)
    async def contacts_error_handler(request: Request, exc: ContactsError):
        """Handle all contacts domain/infrastructure errors."""
        extra = {**exc.log_extra(), "path": request.url.path}
        if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING):
            logger.info(f"ContactsError: {exc.message}", extra=extra)
        else:
            logger.error(f"ContactsError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parsing/validation errors (malformed JSON, non-object body)."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": format_validation_errors(list(exc.errors()))},
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server error"},
        )
