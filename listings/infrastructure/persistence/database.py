"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (DATABASE_AUTO_CREATE=true creates it
from ORM metadata instead, for local development).

Engine and session factory are created lazily on first use (get_db) so
import does not trigger Settings validation.

Sessions do not auto-commit: repository write methods commit explicitly so
that services can invalidate cache entries strictly after the write is
durable.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from listings.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless enabled per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, *, echo: bool = False, **overrides: Any) -> AsyncEngine:
    """Create an async engine for database_url (postgres or sqlite)."""
    if database_url.startswith("sqlite"):
        built = create_async_engine(database_url, echo=echo)
        event.listen(built.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return built
    settings = get_settings()
    connect_args: dict[str, Any] = {}
    if "postgresql" in database_url:
        connect_args["command_timeout"] = (
            settings.db_command_timeout if settings.db_command_timeout is not None else 60
        )
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size if settings.db_pool_size is not None else 20,
        max_overflow=(
            settings.db_max_overflow if settings.db_max_overflow is not None else 30
        ),
        pool_recycle=3600,
        connect_args=connect_args,
        **overrides,
    )


def build_session_factory(bound: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by get_db (and by tests with their own engine)."""
    return async_sessionmaker(
        bind=bound,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine = build_engine(settings.database_url, echo=settings.database_echo)
    AsyncSessionLocal = build_session_factory(engine)


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it if needed."""
    _ensure_engine()
    assert engine is not None
    return engine


async def init_models(bound: AsyncEngine) -> None:
    """Create all tables from ORM metadata (development / tests)."""
    from listings.infrastructure.persistence import models  # noqa: F401

    async with bound.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose the process-wide engine (app shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    AsyncSessionLocal = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency.

    Yields a session and closes it on exit; an uncommitted transaction is
    rolled back on close. Repositories commit their own writes.
    """
    _ensure_engine()
    assert AsyncSessionLocal is not None
    async with AsyncSessionLocal() as session:
        yield session
