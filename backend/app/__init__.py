"""Contacts API Package — contact CRUD and vCard zip export over a JSON file store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
