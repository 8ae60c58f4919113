"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Error bodies are {"message"} or {"errors"}; successful bodies are contacts or a zip stream

Design Decisions:
    - Thin routes delegate to the store and export service
"""
