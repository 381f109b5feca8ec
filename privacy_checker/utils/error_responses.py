"""Helper functions for constructing structured API error responses.

Every exception handler in ``privacy_checker.main`` goes through these
builders so error payloads share one shape: the public message, the request ID
and a timezone-aware timestamp.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from privacy_checker.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from privacy_checker.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
    "validation_details",
]


def _current_timestamp() -> datetime:
    """Return a timezone-aware timestamp for error payloads.

    Kept as a separate function so tests can monkeypatch the clock.
    """

    return datetime.now(UTC)


def validation_details(errors: Sequence[dict]) -> list[ValidationErrorDetail]:
    """Convert pydantic/FastAPI error dictionaries into response details."""

    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error.get("loc", ())),
            message=error.get("msg", ""),
            value=error.get("input"),
        )
        for error in errors
    ]


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    detail: str,
    status_code: int,
    path: str,
    error_type: ErrorType = ErrorType.VALIDATION_ERROR,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Construct a ``ValidationErrorResponse`` enriched with metadata."""

    resolved_request_id = request_id or get_request_id()
    return ValidationErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id,
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    status_code: int,
    path: str,
    detail: str | None = None,
    retry_after: int | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct a generic ``ErrorResponse`` enriched with metadata."""

    resolved_request_id = request_id or get_request_id()
    return ErrorResponse(
        error_type=error_type,
        message=message,
        detail=detail,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id,
        path=path,
        retry_after=retry_after,
    )
