"""Business logic powering the favorites API endpoints.

:class:`FavoritesService` sits between the routers and a
:class:`~privacy_checker.services.favorites.FavoritesStore`:

* ``add_favorite`` validates the raw request body against the username format
  rule so malformed input never reaches the store.
* ``remove_favorite``/``update_privacy_status`` apply the missing-username
  policy. By default a missing username is ignored; with ``strict_lookups``
  it raises :class:`FavoriteNotFoundError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Depends, Request
from pydantic import ValidationError

from privacy_checker.errors import (
    DuplicateFavoriteError,
    FavoriteNotFoundError,
    UsernameValidationError,
)
from privacy_checker.schemas.favorites import Favorite, FavoriteCreate
from privacy_checker.services.favorites import FavoritesStore
from privacy_checker.settings import AppSettings

logger = logging.getLogger(__name__)


def decode_favorite_body(raw: bytes) -> Any:
    """Parse a raw add-favorite body. Empty bodies decode to ``None``."""

    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise UsernameValidationError(
            errors=[
                {
                    "loc": ("body",),
                    "msg": "Body is not valid JSON",
                    "input": raw.decode("utf-8", errors="replace"),
                }
            ]
        ) from exc


def parse_favorite_create(payload: Any) -> FavoriteCreate:
    """Validate a raw request body, raising :class:`UsernameValidationError`."""

    try:
        return FavoriteCreate.model_validate(payload)
    except ValidationError as exc:
        raise UsernameValidationError(
            errors=exc.errors(include_url=False, include_context=False)
        ) from exc


class FavoritesService:
    """Coordinates validation, the missing-key policy and the store."""

    def __init__(self, store: FavoritesStore, *, strict_lookups: bool = False) -> None:
        self._store = store
        self._strict_lookups = strict_lookups

    @property
    def strict_lookups(self) -> bool:
        return self._strict_lookups

    async def list_favorites(self) -> list[Favorite]:
        return await self._store.list_favorites()

    async def add_favorite(self, payload: Any) -> Favorite:
        try:
            request = parse_favorite_create(payload)
        except UsernameValidationError:
            logger.warning("Rejected favorite with invalid username: %r", payload)
            raise

        try:
            favorite = await self._store.add_favorite(request.username)
        except DuplicateFavoriteError:
            logger.warning("Rejected duplicate favorite %s", request.username)
            raise

        logger.info("Added favorite %s (id=%s)", favorite.username, favorite.id)
        return favorite

    async def remove_favorite(self, username: str) -> None:
        removed = await self._store.remove_favorite(username)
        if removed:
            logger.info("Removed favorite %s", username)
            return

        logger.debug("Remove requested for unknown favorite %s", username)
        if self._strict_lookups:
            raise FavoriteNotFoundError(username)

    async def update_privacy_status(self, username: str, is_private: bool) -> None:
        updated = await self._store.update_privacy_status(username, is_private)
        if updated:
            logger.info("Recorded %s as %s", username, "private" if is_private else "public")
            return

        logger.debug("Status update requested for unknown favorite %s", username)
        if self._strict_lookups:
            raise FavoriteNotFoundError(username)


def get_favorites_store(request: Request) -> FavoritesStore:
    """Return the store constructed for the running application."""

    return request.app.state.favorites_store


def get_app_settings(request: Request) -> AppSettings:
    return request.app.state.settings


async def get_favorites_service(
    store: FavoritesStore = Depends(get_favorites_store),
    settings: AppSettings = Depends(get_app_settings),
) -> FavoritesService:
    """FastAPI dependency that wires the service to the application's store."""

    return FavoritesService(store, strict_lookups=settings.strict_favorite_lookups)


__all__ = [
    "FavoritesService",
    "get_app_settings",
    "get_favorites_service",
    "decode_favorite_body",
    "get_favorites_store",
    "parse_favorite_create",
]
