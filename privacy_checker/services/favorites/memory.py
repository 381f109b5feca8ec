"""Process-local favorites store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime

from privacy_checker.errors import DuplicateFavoriteError
from privacy_checker.schemas.favorites import Favorite

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(UTC)


class InMemoryFavoritesStore:
    """Favorites kept in a dict for the lifetime of the process.

    Mutations run under an ``asyncio.Lock`` so the duplicate check and the id
    assignment in :meth:`add_favorite` can never interleave with another
    coroutine. Records are replaced rather than mutated in place, and callers
    always receive copies.
    """

    def __init__(self, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._favorites: dict[str, Favorite] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()
        self._clock = clock

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def list_favorites(self) -> list[Favorite]:
        return [favorite.model_copy() for favorite in self._favorites.values()]

    async def add_favorite(self, username: str) -> Favorite:
        async with self._lock:
            if username in self._favorites:
                raise DuplicateFavoriteError(username)

            favorite = Favorite(
                id=self._next_id,
                username=username,
                is_private=None,
                last_checked=None,
            )
            # ids are never handed out twice, even after a removal
            self._next_id += 1
            self._favorites[username] = favorite

        logger.debug("Stored favorite %s with id %s", username, favorite.id)
        return favorite.model_copy()

    async def remove_favorite(self, username: str) -> bool:
        async with self._lock:
            return self._favorites.pop(username, None) is not None

    async def update_privacy_status(self, username: str, is_private: bool) -> bool:
        async with self._lock:
            favorite = self._favorites.get(username)
            if favorite is None:
                return False

            self._favorites[username] = favorite.model_copy(
                update={"is_private": is_private, "last_checked": self._clock()}
            )
            return True

    def __len__(self) -> int:
        return len(self._favorites)


__all__ = ["InMemoryFavoritesStore", "utcnow"]
