"""Contract shared by every favorites store implementation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from privacy_checker.schemas.favorites import Favorite


@runtime_checkable
class FavoritesStore(Protocol):
    """Collection of favorites keyed by username.

    Implementations never validate the username format; callers do that before
    reaching the store. ``add_favorite`` raises
    :class:`~privacy_checker.errors.DuplicateFavoriteError` for a known
    username. ``remove_favorite`` and ``update_privacy_status`` never fail for a
    missing username and report through their return value whether a record
    was affected.
    """

    async def initialize(self) -> None:
        """Prepare backing resources before the first request."""

    async def close(self) -> None:
        """Release backing resources on shutdown."""

    async def list_favorites(self) -> list[Favorite]:
        ...

    async def add_favorite(self, username: str) -> Favorite:
        ...

    async def remove_favorite(self, username: str) -> bool:
        ...

    async def update_privacy_status(self, username: str, is_private: bool) -> bool:
        ...


__all__ = ["FavoritesStore"]
