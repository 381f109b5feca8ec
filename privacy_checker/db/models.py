"""SQLAlchemy ORM models backing the persistent favorites store."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class FavoriteRecord(Base):
    """A tracked username together with its cached privacy status."""

    __tablename__ = "favorites"
    # AUTOINCREMENT stops SQLite from handing out the id of a deleted row again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True, index=True
    )
    is_private: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    last_checked: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return f"FavoriteRecord(id={self.id!r}, username={self.username!r})"


__all__ = ["Base", "FavoriteRecord"]
