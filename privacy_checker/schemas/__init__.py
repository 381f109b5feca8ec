"""Pydantic schemas for API requests and responses."""

from privacy_checker.schemas.favorites import (  # noqa: F401
    Favorite,
    FavoriteCreate,
    FavoriteStatusUpdate,
)
from privacy_checker.schemas.privacy import (  # noqa: F401
    PrivacyCheckRequest,
    PrivacyCheckResult,
)
