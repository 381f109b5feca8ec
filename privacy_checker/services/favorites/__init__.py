"""Favorites storage components.

``FavoritesStore`` is the contract consumed by the service layer;
``InMemoryFavoritesStore`` and ``SqlAlchemyFavoritesStore`` are the two
interchangeable implementations selected through ``FAVORITES_BACKEND``.
"""

from .memory import InMemoryFavoritesStore
from .persistence import SqlAlchemyFavoritesStore
from .store import FavoritesStore

__all__ = [
    "FavoritesStore",
    "InMemoryFavoritesStore",
    "SqlAlchemyFavoritesStore",
]
