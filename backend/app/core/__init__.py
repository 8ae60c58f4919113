"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - All functions are pure and deterministic
"""
