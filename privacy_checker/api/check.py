"""Router for the account privacy check."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from privacy_checker.errors import fault_boundary
from privacy_checker.schemas.privacy import PrivacyCheckRequest, PrivacyCheckResult
from privacy_checker.services.privacy_service import PrivacyService, get_privacy_service

router = APIRouter()


@router.post("/check", response_model=PrivacyCheckResult)
async def check_account(
    payload: Any = Body(
        None,
        examples=[{"username": "alice"}],
        description="Optional object with a free-form ``username``.",
    ),
    service: PrivacyService = Depends(get_privacy_service),
) -> PrivacyCheckResult:
    """Report whether an account is private. Nothing is persisted.

    Any JSON body is accepted; a body that is not an object carries no username.
    """

    with fault_boundary("Failed to check account status"):
        request = PrivacyCheckRequest.model_validate(
            payload if isinstance(payload, dict) else {}
        )
        return await service.check(request.username)
