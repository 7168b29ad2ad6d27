"""Fixtures for API tests."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.main import app
from api.session import InMemorySessionStore, set_session_store


@pytest.fixture(autouse=True)
def memory_store():
    """Use a fresh in-memory session store for every test."""
    store = InMemorySessionStore()
    set_session_store(store)
    yield store
    set_session_store(None)


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def session_id(client):
    """A new history session."""
    response = await client.post("/api/history/new")
    return response.json()["session_id"]
