"""Database-backed favorites store built on SQLAlchemy's async ORM."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from privacy_checker.db.connection import create_session_factory, create_tables
from privacy_checker.db.models import FavoriteRecord
from privacy_checker.errors import DuplicateFavoriteError
from privacy_checker.schemas.favorites import Favorite
from privacy_checker.services.favorites.memory import utcnow

logger = logging.getLogger(__name__)


def _record_to_schema(record: FavoriteRecord) -> Favorite:
    favorite = Favorite.model_validate(record)
    # SQLite drops tzinfo on the way back out.
    if favorite.last_checked is not None and favorite.last_checked.tzinfo is None:
        favorite.last_checked = favorite.last_checked.replace(tzinfo=UTC)
    return favorite


class SqlAlchemyFavoritesStore:
    """Persists favorites in the ``favorites`` table.

    Each operation opens its own session. Uniqueness is enforced by the
    table's unique constraint in addition to an explicit lookup, so a racing
    insert still surfaces as :class:`DuplicateFavoriteError`. Status updates
    are a single ``UPDATE`` statement, keeping ``is_private`` and
    ``last_checked`` in step.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        clock: Callable[[], datetime] = utcnow,
        create_schema: bool = True,
    ) -> None:
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self._clock = clock
        self._create_schema = create_schema

    async def initialize(self) -> None:
        if self._create_schema:
            await create_tables(self._engine)
            logger.info("Favorites table ready")

    async def close(self) -> None:
        await self._engine.dispose()

    async def list_favorites(self) -> list[Favorite]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(FavoriteRecord).order_by(FavoriteRecord.id)
            )
            return [_record_to_schema(record) for record in result.scalars()]

    async def add_favorite(self, username: str) -> Favorite:
        async with self._session_factory() as session:
            existing = await session.scalar(
                select(FavoriteRecord.id).where(FavoriteRecord.username == username)
            )
            if existing is not None:
                raise DuplicateFavoriteError(username)

            record = FavoriteRecord(username=username, is_private=None, last_checked=None)
            session.add(record)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateFavoriteError(username) from exc

            return _record_to_schema(record)

    async def remove_favorite(self, username: str) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(FavoriteRecord).where(FavoriteRecord.username == username)
            )
            await session.commit()
            return result.rowcount > 0

    async def update_privacy_status(self, username: str, is_private: bool) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                update(FavoriteRecord)
                .where(FavoriteRecord.username == username)
                .values(is_private=is_private, last_checked=self._clock())
            )
            await session.commit()
            return result.rowcount > 0


__all__ = ["SqlAlchemyFavoritesStore"]
