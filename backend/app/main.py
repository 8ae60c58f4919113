"""Contacts API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Export router registered before the CRUD router (/contacts/export vs /contacts/{id})
    - Global error handlers map ContactsError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Contact store constructed and its file initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Run with: uvicorn app.main:app --port 3000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import contacts, contacts_export
from app.config import get_settings
from app.infrastructure.contact_store import init_store
from app.infrastructure.observability import bind_request_context, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = init_store(settings.contacts_file)
    await store.ensure_initialized()
    logger.info(f"Contacts API started (storage={store.path.resolve()})")
    yield
    logger.info("Contacts API shutting down")


app = FastAPI(
    title="Contacts API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(bind_request_context)

app.include_router(contacts_export.router)
app.include_router(contacts.router)

register_error_handlers(app)
