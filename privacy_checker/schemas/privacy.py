"""Schemas for the account privacy check endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from privacy_checker.schemas.favorites import CamelModel


class PrivacyCheckRequest(CamelModel):
    """Body accepted by ``POST /api/check``.

    The username is free-form here; only favorites enforce the format rule.
    """

    username: Any = Field(None, description="Account handle to look up")


class PrivacyCheckResult(CamelModel):
    """Outcome of a privacy lookup."""

    is_private: bool
