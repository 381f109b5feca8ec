"""Shared fixtures for store, service and API tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from privacy_checker.main import create_app
from privacy_checker.services.favorites import (
    FavoritesStore,
    InMemoryFavoritesStore,
    SqlAlchemyFavoritesStore,
)
from privacy_checker.settings import AppSettings

from .support import FixedPrivacyLookup, fixed_clock, sqlite_url


@pytest.fixture
def memory_store() -> InMemoryFavoritesStore:
    return InMemoryFavoritesStore(clock=fixed_clock)


@pytest_asyncio.fixture
async def database_store(tmp_path: Path) -> AsyncIterator[SqlAlchemyFavoritesStore]:
    """Database store backed by a throwaway SQLite file."""
    store = SqlAlchemyFavoritesStore(
        create_async_engine(sqlite_url(tmp_path)), clock=fixed_clock
    )
    await store.initialize()
    yield store
    await store.close()


@pytest_asyncio.fixture(params=["memory", "database"])
async def store(
    request: pytest.FixtureRequest, tmp_path: Path
) -> AsyncIterator[FavoritesStore]:
    """Run store contract tests against both implementations."""
    if request.param == "memory":
        yield InMemoryFavoritesStore(clock=fixed_clock)
        return

    database = SqlAlchemyFavoritesStore(
        create_async_engine(sqlite_url(tmp_path)), clock=fixed_clock
    )
    await database.initialize()
    yield database
    await database.close()


@pytest.fixture
def privacy_lookup() -> FixedPrivacyLookup:
    return FixedPrivacyLookup(answer=True)


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(FAVORITES_BACKEND="memory", STRICT_FAVORITE_LOOKUPS=False)


@pytest.fixture
def app(
    app_settings: AppSettings,
    memory_store: InMemoryFavoritesStore,
    privacy_lookup: FixedPrivacyLookup,
) -> FastAPI:
    return create_app(app_settings, store=memory_store, privacy_lookup=privacy_lookup)


@pytest_asyncio.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create an ``AsyncClient`` bound to an app with injected collaborators."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
