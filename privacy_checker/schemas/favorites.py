"""Pydantic schemas that power the favorites API surface."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic.alias_generators import to_camel

USERNAME_PATTERN = r"^[a-zA-Z0-9._]+$"
USERNAME_MIN_LENGTH = 1
USERNAME_MAX_LENGTH = 30


class CamelModel(BaseModel):
    """Base model serializing snake_case attributes as camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FavoriteCreate(CamelModel):
    """Payload for adding a username to the favorites list."""

    username: StrictStr = Field(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        pattern=USERNAME_PATTERN,
        description="Account handle made of letters, digits, dots and underscores.",
    )


class FavoriteStatusUpdate(CamelModel):
    """Payload recording the outcome of a privacy check for a favorite."""

    is_private: StrictBool = Field(
        ..., description="Whether the account was found to be private."
    )


class Favorite(CamelModel):
    """Read model exposed in API responses."""

    id: int = Field(..., description="Sequential identifier, never reused")
    username: str
    is_private: bool | None = Field(
        None, description="Cached privacy status; null until a check is recorded."
    )
    last_checked: datetime | None = Field(
        None, description="When ``is_private`` was last recorded."
    )


__all__ = [
    "USERNAME_MAX_LENGTH",
    "USERNAME_MIN_LENGTH",
    "USERNAME_PATTERN",
    "CamelModel",
    "Favorite",
    "FavoriteCreate",
    "FavoriteStatusUpdate",
]
