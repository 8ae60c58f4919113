"""Structured Logging — JSON formatter fields and setup."""

import json
import logging

from app.infrastructure.observability import (
    JSONFormatter,
    RequestContextFilter,
    bind_request_context,
    request_path,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.test", logging.INFO, __file__, 1, "Contact %s", ("created",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "app.test"
    assert log["message"] == "Contact created"
    assert "timestamp" in log


def test_json_formatter_includes_known_extras():
    log = json.loads(JSONFormatter().format(_record(contact_id="a", entries=3)))
    assert log["contact_id"] == "a"
    assert log["entries"] == 3


def test_json_formatter_skips_none_extras():
    log = json.loads(JSONFormatter().format(_record(contact_id=None)))
    assert "contact_id" not in log


def test_json_formatter_serializes_debug_info():
    log = json.loads(JSONFormatter().format(_record(debug_info={"detail": "disk full"})))
    assert log["debug_info"] == {"detail": "disk full"}


def test_request_filter_stamps_current_path():
    token = request_path.set("GET /contacts")
    try:
        record = _record()
        RequestContextFilter().filter(record)
    finally:
        request_path.reset(token)
    assert record.path == "GET /contacts"


def test_request_filter_keeps_explicit_path():
    token = request_path.set("GET /contacts")
    try:
        record = _record(path="/explicit")
        RequestContextFilter().filter(record)
    finally:
        request_path.reset(token)
    assert record.path == "/explicit"


def test_request_filter_outside_request_sets_none():
    record = _record()
    RequestContextFilter().filter(record)
    assert record.path is None


async def test_bind_request_context_scopes_path_to_call():
    seen = []

    class _Request:
        method = "DELETE"

        class url:
            path = "/contacts/a"

    async def _call_next(request):
        seen.append(request_path.get())
        return "response"

    assert await bind_request_context(_Request(), _call_next) == "response"
    assert seen == ["DELETE /contacts/a"]
    assert request_path.get() is None
