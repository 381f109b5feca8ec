"""Tests covering the helper utilities that construct error responses."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from privacy_checker.schemas.error import ErrorType, ValidationErrorDetail
from privacy_checker.utils import error_responses
from privacy_checker.utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    validation_details,
)
from privacy_checker.utils.request_context import clear_request_id, set_request_id


def _freeze_timestamp(monkeypatch: pytest.MonkeyPatch, fixed: datetime) -> None:
    """Override ``_current_timestamp`` to yield the provided ``datetime``."""

    monkeypatch.setattr(error_responses, "_current_timestamp", lambda: fixed)


def test_build_validation_error_response_includes_context_metadata(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The helper should embed the request ID and a timezone-aware timestamp."""

    fixed_timestamp = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
    _freeze_timestamp(monkeypatch, fixed_timestamp)

    token = set_request_id("req-123")
    try:
        errors = [
            ValidationErrorDetail(
                field="username",
                message="String should have at most 30 characters",
                value="x" * 31,
            )
        ]

        response = build_validation_error_response(
            message="Invalid username format",
            detail="1 validation error(s)",
            status_code=400,
            path="/api/favorites",
            errors=errors,
        )

        assert response.request_id == "req-123"
        assert response.timestamp == fixed_timestamp
        assert response.errors == errors
        assert response.error_type is ErrorType.VALIDATION_ERROR
    finally:
        clear_request_id(token)


def test_build_error_response_allows_request_id_override(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Explicit request identifiers should take precedence over context values."""

    fixed_timestamp = datetime(2024, 1, 2, 6, 30, 0, tzinfo=UTC)
    _freeze_timestamp(monkeypatch, fixed_timestamp)

    clear_request_id()

    response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Failed to remove favorite",
        status_code=500,
        path="/api/favorites/alice",
        request_id="override-id",
    )

    assert response.request_id == "override-id"
    assert response.timestamp == fixed_timestamp
    assert response.detail is None
    assert response.retry_after is None


def test_validation_details_flattens_locations() -> None:
    details = validation_details(
        [
            {"loc": ("body", "isPrivate"), "msg": "Field required", "input": {}},
            {"loc": (), "msg": "Input should be a valid dictionary", "input": None},
        ]
    )

    assert [detail.field for detail in details] == ["body.isPrivate", ""]
    assert details[0].value == {}
    assert details[1].message == "Input should be a valid dictionary"
