"""Validation Messages — pure mapping from pydantic error dicts to API error entries.

Invariants:
    - One output entry per input error, order preserved
    - Known field failures get a fixed human message; everything else keeps pydantic's msg
    - A leading "body" location segment is dropped (route-level and store-level errors look the same)

Design Decisions:
    - Operates on plain dicts (pydantic's errors() shape): core stays free of pydantic imports
"""

# Field -> message for "value is empty or malformed" failures
FIELD_MESSAGES: dict[str, str] = {
    "name": "Name is required",
    "phone": "Phone number is required",
    "email": "Invalid email format",
}

# Type failures keep pydantic's own wording ("Input should be a valid string")
_PASSTHROUGH_TYPES = frozenset({"string_type", "bool_type"})


def _field_path(loc) -> str:
    parts = list(loc)
    # ("body", <offset>) from json_invalid names the whole body, not a field
    if len(parts) > 1 and parts[0] == "body" and isinstance(parts[1], str):
        parts = parts[1:]
    elif parts and parts[0] == "body":
        parts = parts[:1]
    return ".".join(str(p) for p in parts)


def format_validation_errors(errors: list[dict]) -> list[dict]:
    """Convert pydantic errors() output to [{"field", "message", "type"}]."""
    formatted = []
    for e in errors:
        field = _field_path(e.get("loc", ()))
        error_type = e.get("type", "value_error")
        message = FIELD_MESSAGES.get(field)
        if message is None or error_type in _PASSTHROUGH_TYPES:
            message = e.get("msg", "Invalid value")
        formatted.append({"field": field, "message": message, "type": error_type})
    return formatted
