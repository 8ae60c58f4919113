"""API test fixtures — FastAPI test client bound to a temp-path store.

Invariants:
    - Every test gets its own backing file under tmp_path
    - get_contact_store dependency overridden; lifespan is not run by ASGITransport

Design Decisions:
    - raising_client keeps httpx's default (app exceptions re-raised) for mid-stream aborts;
      client mirrors a real server where unhandled errors become a 500 response
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.infrastructure.contact_store import get_contact_store
from app.main import app


@pytest.fixture
def override_store(store):
    app.dependency_overrides[get_contact_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_store):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def raising_client(override_store):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
