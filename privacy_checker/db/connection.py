"""Async SQLAlchemy engine and session helpers for the database store."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from privacy_checker.db.models import Base

logger = logging.getLogger(__name__)


def _sanitize_database_url(url: str) -> str:
    """Hide the password portion of ``url`` so it can be logged."""

    return make_url(url).render_as_string(hide_password=True)


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-based SQLite database."""

    database = make_url(url).database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for ``database_url``.

    PostgreSQL engines get a warm connection pool; SQLite engines use the
    driver defaults because the file lives on the local disk.
    """

    logger.info("Creating database engine for %s", _sanitize_database_url(database_url))

    if database_url.startswith("sqlite"):
        _ensure_sqlite_directory(database_url)
        return create_async_engine(database_url, future=True, echo=False)

    return create_async_engine(
        database_url,
        future=True,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=1800,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def create_tables(engine: AsyncEngine) -> None:
    """Create the favorites table if it does not exist yet."""

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


__all__ = [
    "create_engine",
    "create_session_factory",
    "create_tables",
]
