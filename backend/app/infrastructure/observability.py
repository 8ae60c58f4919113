"""Structured Logging — JSON formatter, request context and setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Contact extras (contact_id, error_code, operation, debug_info, entries) surfaced when present
    - Records emitted while a request is handled carry its method + path, unless the call set one
    - JSON format in production, human-readable in development

Design Decisions:
    - Request path lives in a ContextVar set by HTTP middleware: store and export code log
      without threading the request through every call
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from contextvars import ContextVar
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "contact_id", "error_code", "operation", "debug_info", "path", "entries",
)

request_path: ContextVar[str | None] = ContextVar("request_path", default=None)


class RequestContextFilter(logging.Filter):
    """Stamp records with the current request's "METHOD /path"."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "path", None) is None:
            record.path = request_path.get()
        return True


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


async def bind_request_context(request, call_next):
    """HTTP middleware: expose the request to every log call made while handling it."""
    token = request_path.set(f"{request.method} {request.url.path}")
    try:
        return await call_next(request)
    finally:
        request_path.reset(token)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestContextFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(path)s]: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
