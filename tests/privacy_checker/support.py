"""Test doubles shared across the privacy checker test modules."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from privacy_checker.schemas.favorites import Favorite

FIXED_NOW = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


class FixedPrivacyLookup:
    """Lookup double that always answers with ``answer`` and records calls."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.calls: list[Any] = []

    async def check(self, username: Any) -> bool:
        self.calls.append(username)
        return self.answer


class ExplodingPrivacyLookup:
    """Lookup whose backend is unavailable."""

    async def check(self, username: Any) -> bool:
        raise ConnectionError("lookup backend unreachable at 10.0.0.7")


class ExplodingFavoritesStore:
    """Store double whose every operation fails unexpectedly."""

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def list_favorites(self) -> list[Favorite]:
        raise RuntimeError("secret connection string leaked")

    async def add_favorite(self, username: str) -> Favorite:
        raise RuntimeError("secret connection string leaked")

    async def remove_favorite(self, username: str) -> bool:
        raise RuntimeError("secret connection string leaked")

    async def update_privacy_status(self, username: str, is_private: bool) -> bool:
        raise RuntimeError("secret connection string leaked")


def sqlite_url(directory: Path) -> str:
    return f"sqlite+aiosqlite:///{directory / 'favorites.db'}"
