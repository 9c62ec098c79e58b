"""
Exercise Tracker — Database Handle & Session Management
=========================================================

What:  The long-lived store handle (async engine + session factory), the ORM
       base class, and the per-request session dependency.
How:   `Database` wraps an async SQLAlchemy engine. One instance is opened by
       the application lifespan, parked on `app.state.database`, and handed to
       route handlers through `get_db_session`, which yields one AsyncSession
       per request: commit on success, rollback on error.
Who:   The app factory (lifecycle), route handlers (sessions), health probe.
When:  Opened at startup, disposed at shutdown; sessions are per-request.

Connection Pooling:
    Server databases (PostgreSQL/asyncpg) get a bounded pool with pre-ping and
    hourly recycling. SQLite URLs keep the engine defaults, and tests pass
    their own pool class (StaticPool) for a shared in-memory database.
"""

from typing import Any, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from exercise_tracker.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, Alembic
    (`alembic/env.py`) and `Database.create_all()`.
    """
    pass


class Database:
    """
    Process-wide handle on the store.

    Lifecycle: open at launch (`from_settings`), closed at shutdown
    (`dispose`). Holds no request state; sessions come from `session()`.
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Settings) -> "Database":
        """Build the handle from application settings."""
        engine_kwargs: dict = {}
        if not config.is_sqlite:
            engine_kwargs.update(
                pool_size=config.db_pool_size,
                max_overflow=config.db_max_overflow,
                pool_pre_ping=config.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(
            config.database_url,
            echo=config.log_level == "DEBUG",
            **engine_kwargs,
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self) -> None:
        """
        Create all tables from the ORM metadata.

        Production schemas are managed by Alembic; this is used by the test
        suite and for throwaway SQLite databases.
        """
        # Registers the tables on Base.metadata
        from exercise_tracker.models import exercise, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()

    def __repr__(self) -> str:
        return f"<Database(url='{self.engine.url.render_as_string(hide_password=True)}')>"


# ── Dependencies ──────────────────────────────────────────────────────────

def get_database(request: Request) -> Database:
    """FastAPI dependency returning the handle opened by the lifespan."""
    return request.app.state.database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the injected Database handle
        2. Yields it to the route handler
        3. On success: commits
        4. On error: rolls back and re-raises for the global handlers

    Example usage in a route:
        @router.get("/api/users")
        async def list_users(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
