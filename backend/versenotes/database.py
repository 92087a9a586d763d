"""
VerseNotes Backend — Database Connection Management
=====================================================

What:  Async SQLAlchemy engine, session factory, schema initializer, and the
       FastAPI dependency that hands a session to each request.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` handle owns the engine (and therefore the connection pool).
       The application factory creates one handle and stores it on
       `app.state.database`; handlers receive sessions through `get_db_session`.
Who:   Created by create_app(); used by route handlers via Depends().
When:  Engine is created with the app; sessions are created per request.

Architecture Decision:
    The handle is injected rather than created at import time so that tests
    (and alternative deployments) can point an app at a different store
    without patching module globals.

Connection Pooling Strategy:
    pool_size / max_overflow:  Persistent + burst connections (PostgreSQL only)
    pool_pre_ping:             Validates connections before use
    pool_recycle=3600:         Recycles connections every hour
    SQLite (tests) keeps SQLAlchemy's default pool for the dialect.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from versenotes.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


def _log_invalidated_connection(dbapi_connection, connection_record, exception) -> None:
    """
    Pool listener: reports connections discarded because of a fault.

    Fires when the pool invalidates a connection, e.g. when the server closed
    it while it sat idle. The pool replaces it transparently; we only log.
    """
    if exception is not None:
        logger.error("Unexpected error on idle connection: %s", exception)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores REFERENCES ... ON DELETE CASCADE unless this pragma is on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    True if the IntegrityError was raised by a UNIQUE constraint.

    PostgreSQL reports SQLSTATE 23505 (exposed by the asyncpg adapter as
    `sqlstate`/`pgcode`); SQLite only offers the message text.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == "23505":
        return True
    return "UNIQUE constraint failed" in str(orig)


class Database:
    """
    Owns the async engine (connection pool) and the session factory.

    Attributes:
        engine:           AsyncEngine with the shared connection pool
        session_factory:  Creates one AsyncSession per request
    """

    def __init__(self, settings: Settings):
        url = make_url(settings.database_url)
        engine_kwargs = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            # Echo SQL queries in DEBUG mode for development visibility
            "echo": settings.log_level == "DEBUG",
        }
        connect_args = {}

        if url.get_backend_name() == "sqlite":
            self.is_sqlite = True
        else:
            self.is_sqlite = False
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )
            if settings.database_ssl:
                # asyncpg: "require" encrypts without verifying the certificate
                connect_args["ssl"] = "require"

        self.engine: AsyncEngine = create_async_engine(
            url, connect_args=connect_args, **engine_kwargs
        )

        # Pool events are registered on the sync engine behind the async facade
        event.listen(self.engine.sync_engine, "invalidate", _log_invalidated_connection)
        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: attributes stay readable after the request commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """
        Ensure users, posts and highlights exist (CREATE TABLE IF NOT EXISTS).

        create_all() checks for each table before creating it, so calling this
        on every startup is safe. Errors propagate; the lifespan decides
        whether they are fatal.
        """
        # Model modules register their tables on Base.metadata at import
        from versenotes.models import Highlight, Post, User  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Closes all pooled connections. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Takes the Database handle the app was built with
        2. Opens a session (checks a connection out of the pool lazily)
        3. On success: commits; on error: rolls back and re-raises
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/posts")
        async def list_posts(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
