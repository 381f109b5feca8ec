"""Centralized configuration management for the privacy checker API."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load a local .env before the settings singleton is created so every module
# importing :mod:`privacy_checker.settings` observes the same environment.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_SQLITE_DATABASE_URL = "sqlite+aiosqlite:///./data/favorites.db"
POSTGRES_ASYNC_PREFIX = "postgresql+psycopg://"
POSTGRES_SYNC_PREFIXES = ("postgres://", "postgresql://")
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PRIVATE_PROBABILITY = 0.5


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Besides the raw environment values the class exposes a few derived
    helpers (normalized database URL, numeric log level) so the rest of the
    code base never repeats the parsing logic.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    favorites_backend: Literal["memory", "database"] = Field(
        default="memory",
        alias="FAVORITES_BACKEND",
        description=(
            "Storage used for favorites. ``memory`` keeps records for the"
            " lifetime of the process, ``database`` persists them through"
            " SQLAlchemy."
        ),
    )
    database_url: str | None = Field(
        default=None,
        alias="DATABASE_URL",
        description=(
            "SQLAlchemy database URL used by the database backend. Postgres URLs"
            " in sync format are coerced into the async psycopg driver string."
        ),
    )
    strict_favorite_lookups: bool = Field(
        default=False,
        alias="STRICT_FAVORITE_LOOKUPS",
        description=(
            "Respond with 404 when removing or updating a username that is not"
            " in the favorites list instead of silently ignoring it."
        ),
    )
    private_probability: float = Field(
        default=DEFAULT_PRIVATE_PROBABILITY,
        ge=0.0,
        le=1.0,
        alias="PRIVATE_PROBABILITY",
        description="Probability that the stub lookup reports an account as private.",
    )
    privacy_lookup_seed: int | None = Field(
        default=None,
        alias="PRIVACY_LOOKUP_SEED",
        description="Optional seed making the stub lookup deterministic.",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of additional CORS origins.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    @field_validator("favorites_backend", mode="before")
    @classmethod
    def _lowercase_backend(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def resolved_database_url(self) -> str:
        """Return the async-compatible database URL after applying fallbacks."""

        if not self.database_url:
            return DEFAULT_SQLITE_DATABASE_URL

        url = self.database_url.strip()

        for prefix in POSTGRES_SYNC_PREFIXES:
            if url.startswith(prefix):
                return url.replace(prefix, POSTGRES_ASYNC_PREFIX, 1)

        if url.startswith(POSTGRES_ASYNC_PREFIX) or url.startswith("sqlite+aiosqlite://"):
            return url

        raise RuntimeError(
            f"Expected a PostgreSQL or async SQLite connection string, received: {url}"
        )

    @property
    def database_type(self) -> str:
        """Return ``sqlite`` when using SQLite otherwise ``postgresql``."""

        if self.resolved_database_url.startswith("sqlite"):
            return "sqlite"
        return "postgresql"

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins supplied via environment variables."""

        if not self.cors_allow_origins_raw:
            return []

        origins = [
            _normalize_origin(origin)
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if self.favorites_backend == "memory":
            warnings.append(
                "FAVORITES_BACKEND is 'memory' - favorites are lost when the "
                "process restarts"
            )
        elif not self.database_url:
            warnings.append(
                "DATABASE_URL is not set - falling back to the local SQLite file "
                f"{DEFAULT_SQLITE_DATABASE_URL}"
            )

        if not self.cors_allow_origins:
            warnings.append(
                "CORS_ALLOW_ORIGINS is not set - using default localhost origins only"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PRIVATE_PROBABILITY",
    "DEFAULT_SQLITE_DATABASE_URL",
    "POSTGRES_ASYNC_PREFIX",
    "POSTGRES_SYNC_PREFIXES",
    "get_settings",
]
