"""Account privacy lookups.

No real integration exists yet: :class:`RandomPrivacyLookup` answers with a
weighted coin flip. Anything implementing :class:`PrivacyLookup` can replace it
without touching the routers.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Protocol, runtime_checkable

from fastapi import Depends, Request

from privacy_checker.schemas.privacy import PrivacyCheckResult

logger = logging.getLogger(__name__)


@runtime_checkable
class PrivacyLookup(Protocol):
    """Answers whether the account behind ``username`` is private."""

    async def check(self, username: Any) -> bool:
        ...


class RandomPrivacyLookup:
    """Stub lookup reporting "private" with probability ``probability``."""

    def __init__(
        self,
        probability: float = 0.5,
        *,
        rng: random.Random | None = None,
    ) -> None:
        if not 0.0 <= probability <= 1.0:
            raise ValueError("probability must be between 0 and 1")
        self._probability = probability
        self._rng = rng or random.Random()

    async def check(self, username: Any) -> bool:
        return self._rng.random() < self._probability


class PrivacyService:
    """Runs a lookup and wraps the answer in the response schema."""

    def __init__(self, lookup: PrivacyLookup) -> None:
        self._lookup = lookup

    async def check(self, username: Any) -> PrivacyCheckResult:
        is_private = await self._lookup.check(username)
        logger.debug("Privacy check for %r returned private=%s", username, is_private)
        return PrivacyCheckResult(is_private=is_private)


def get_privacy_lookup(request: Request) -> PrivacyLookup:
    return request.app.state.privacy_lookup


def get_privacy_service(
    lookup: PrivacyLookup = Depends(get_privacy_lookup),
) -> PrivacyService:
    """FastAPI dependency returning a service bound to the app's lookup."""

    return PrivacyService(lookup)


__all__ = [
    "PrivacyLookup",
    "PrivacyService",
    "RandomPrivacyLookup",
    "get_privacy_lookup",
    "get_privacy_service",
]
