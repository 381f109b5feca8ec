"""Error response schemas for consistent error handling."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Types of errors that can occur."""

    VALIDATION_ERROR = "validation_error"
    DUPLICATE_ERROR = "duplicate_error"
    NOT_FOUND = "not_found"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "duplicate_error",
                "message": "Username already in favorites",
                "detail": "'alice' is already tracked",
                "status_code": 400,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "0b7c3c8e-5d1f-4a52-9a59-3f3f1b0c2d11",
                "path": "/api/favorites",
                "retry_after": None,
            }
        }
    )

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional error details or context")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(..., description="When error occurred")
    request_id: str | None = Field(None, description="Unique request identifier for tracking")
    path: str | None = Field(None, description="Request path that caused the error")
    retry_after: int | None = Field(
        None, description="Seconds to wait before retrying (for transient errors)"
    )


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Extended error response for validation errors."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "validation_error",
                "message": "Invalid username format",
                "detail": "1 validation error(s)",
                "status_code": 400,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "0b7c3c8e-5d1f-4a52-9a59-3f3f1b0c2d11",
                "path": "/api/favorites",
                "errors": [
                    {
                        "field": "username",
                        "message": "String should match pattern '^[a-zA-Z0-9._]+$'",
                        "value": "bad name",
                    },
                ],
            }
        }
    )

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
