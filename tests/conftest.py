"""
Exercise Tracker — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── test_settings:   Settings pointing at in-memory SQLite
    ├── database:        Real Database handle on in-memory SQLite, schema created
    ├── app:             FastAPI app wired to `database`
    └── test_client:     HTTPX AsyncClient talking to `app` over ASGI
"""

import os

# Before any application import: keep tests off real databases
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from exercise_tracker.config import Settings
from exercise_tracker.database import Database
from exercise_tracker.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_user(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
            result = await user_service.get_user(mock_db_session, str(user.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite://",
        log_level="WARNING",
        rate_limit_requests=10_000,
        rate_limit_window=60,
    )


@pytest_asyncio.fixture
async def database():
    """
    In-memory SQLite store with the schema created.

    StaticPool keeps every session on the same connection, so all of them
    see the same in-memory database.
    """
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def app(test_settings, database):
    return create_app(config=test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed directly into the app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
