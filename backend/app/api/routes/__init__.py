"""Route Modules — one file per concern (CRUD, export).

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to store/services)
"""
