"""
VerseNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── hasher:          PasswordHasher at the minimum bcrypt cost
    ├── app_settings:    Settings pointing at a fresh SQLite file per test
    ├── app:             create_app(app_settings) with tables created
    ├── db_session:      Real AsyncSession on that app's database
    └── test_client:     HTTPX AsyncClient talking to the app in-process
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any versenotes imports: the module-level
# app in versenotes.main is built from the environment at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_default.db"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from versenotes.config import Settings
from versenotes.services.password_hasher import PasswordHasher


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_login(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
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
def hasher():
    """bcrypt at cost 4 (the minimum) keeps the suite fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def app_settings(tmp_path):
    """Settings with an isolated SQLite database file for this test."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'versenotes_test.db'}",
        password_hash_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(app_settings):
    """
    A fully wired application on its own database.

    ASGITransport does not run the lifespan, so the schema is created here
    the same way startup would create it.
    """
    from versenotes.main import create_app

    application = create_app(app_settings)
    await application.state.database.create_tables()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def db_session(app):
    """A real session on the test database, for seeding and inspection."""
    async with app.state.database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client wired directly to the app (no server process).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
