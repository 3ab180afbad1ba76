"""
Notes API — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── gateway: PersistenceGateway on a throwaway SQLite file (aiosqlite),
    │            notes table created
    ├── small_gateway: same, with a single pooled connection and short timeout
    ├── test_client: HTTPX AsyncClient bound to an app using `gateway`
    ├── mock_connection / mock_gateway: no database at all, for failure injection
    └── sample_note_row: a stored-row dict
"""

import os
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any notes_api import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["KEYWORD_FUNCTION_URL"] = "https://keyword-echo.test/"
os.environ["RETRY_MAX_ATTEMPTS"] = "3"
os.environ["RETRY_MIN_WAIT"] = "0"
os.environ["RETRY_MAX_WAIT"] = "0"
os.environ["RETRY_JITTER"] = "0"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notes_api.config import Settings
from notes_api.database import Base, create_gateway
from notes_api.models.note import Note  # noqa: F401  (registers the table)


async def _build_gateway(tmp_path, **overrides):
    config = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}",
        **overrides,
    )
    gateway = create_gateway(config)
    async with gateway.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return gateway


@pytest_asyncio.fixture
async def gateway(tmp_path):
    """A real gateway over a fresh SQLite database with an empty notes table."""
    gw = await _build_gateway(tmp_path)
    yield gw
    await gw.dispose()


@pytest_asyncio.fixture
async def small_gateway(tmp_path):
    """One pooled connection, no overflow, 0.2s acquisition timeout."""
    gw = await _build_gateway(
        tmp_path,
        db_pool_size=1,
        db_max_overflow=0,
        db_pool_timeout=0.2,
    )
    yield gw
    await gw.dispose()


@pytest_asyncio.fixture
async def test_client(gateway):
    """
    Async HTTP client talking to an app bound to the `gateway` fixture.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/notes")
            assert response.status_code == 200
    """
    from notes_api.main import create_app
    app = create_app(gateway=gateway)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_connection():
    """Stands in for GatewayConnection; set `query.return_value` / `side_effect`."""
    conn = MagicMock()
    conn.query = AsyncMock()
    return conn


@pytest.fixture
def mock_gateway(mock_connection):
    """
    A gateway whose acquire() yields `mock_connection` and records releases.

    `gateway.released` counts how many acquired connections were given back.
    """
    gw = MagicMock()
    gw.released = 0

    @asynccontextmanager
    async def acquire():
        try:
            yield mock_connection
        finally:
            gw.released += 1

    gw.acquire = acquire
    return gw


@pytest.fixture
def sample_note_row():
    return {"id": 7, "title": "Groceries", "content": "milk, eggs"}
