"""Construction of the long-lived collaborators shared by every request.

``create_app`` calls these factories once at startup and keeps the results on
``app.state``; the request-level dependencies in the service modules read them
back from there. Keeping construction here means tests and scripts can build
the same objects without importing the web layer.
"""

from __future__ import annotations

import logging
import random

from privacy_checker.db.connection import create_engine
from privacy_checker.services.favorites import (
    FavoritesStore,
    InMemoryFavoritesStore,
    SqlAlchemyFavoritesStore,
)
from privacy_checker.services.privacy_service import PrivacyLookup, RandomPrivacyLookup
from privacy_checker.settings import AppSettings

logger = logging.getLogger(__name__)


def build_favorites_store(settings: AppSettings) -> FavoritesStore:
    """Return the favorites store selected by ``FAVORITES_BACKEND``."""

    if settings.favorites_backend == "database":
        engine = create_engine(settings.resolved_database_url)
        logger.info("Using %s favorites store", settings.database_type)
        return SqlAlchemyFavoritesStore(engine)

    logger.info("Using in-memory favorites store")
    return InMemoryFavoritesStore()


def build_privacy_lookup(settings: AppSettings) -> PrivacyLookup:
    """Return the stub lookup configured from ``PRIVATE_PROBABILITY``/``PRIVACY_LOOKUP_SEED``."""

    rng = random.Random(settings.privacy_lookup_seed)
    return RandomPrivacyLookup(settings.private_probability, rng=rng)


__all__ = ["build_favorites_store", "build_privacy_lookup"]
