"""Pydantic Schemas — contact record and write-payload validation.

Invariants:
    - Schemas validate at the system boundary (create/update payloads)
    - Validation failures leave as core.errors.ContactValidationError
"""
