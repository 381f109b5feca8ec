"""Domain exceptions raised by the favorites and privacy-check workflows.

The API layer maps each class onto an HTTP status inside ``privacy_checker.main``.
Subclassing the matching builtin (``ValueError``/``LookupError``) keeps the
exceptions usable by callers that only care about the broad category.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

__all__ = [
    "DuplicateFavoriteError",
    "FavoriteNotFoundError",
    "FavoritesError",
    "InternalFaultError",
    "UsernameValidationError",
    "fault_boundary",
]


class FavoritesError(Exception):
    """Base class for errors surfaced to API clients."""

    message: str = "Favorites operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class UsernameValidationError(FavoritesError, ValueError):
    """The supplied username does not satisfy the format rule."""

    message = "Invalid username format"

    def __init__(
        self,
        message: str | None = None,
        *,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class DuplicateFavoriteError(FavoritesError, ValueError):
    """The username is already present in the favorites store."""

    message = "Username already in favorites"

    def __init__(self, username: str) -> None:
        super().__init__()
        self.username = username


class FavoriteNotFoundError(FavoritesError, LookupError):
    """Raised for missing usernames when strict lookups are enabled."""

    message = "Favorite not found"

    def __init__(self, username: str) -> None:
        super().__init__()
        self.username = username


class InternalFaultError(FavoritesError):
    """Wraps an unexpected failure behind a public, route-specific message."""

    message = "Internal server error"


@contextmanager
def fault_boundary(message: str) -> Iterator[None]:
    """Re-raise unexpected exceptions as :class:`InternalFaultError`.

    Domain errors pass through untouched so their own handlers still apply.
    The original exception stays available as ``__cause__`` for logging but
    never reaches the response body.
    """

    try:
        yield
    except FavoritesError:
        raise
    except Exception as exc:
        raise InternalFaultError(message) from exc
