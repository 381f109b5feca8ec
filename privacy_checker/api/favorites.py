"""FastAPI router exposing CRUD operations for the favorites list."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Request, Response, status

from privacy_checker.errors import fault_boundary
from privacy_checker.schemas.favorites import (
    Favorite,
    FavoriteCreate,
    FavoriteStatusUpdate,
)
from privacy_checker.services.favorites_service import (
    FavoritesService,
    decode_favorite_body,
    get_favorites_service,
)

router = APIRouter()

_FAVORITE_CREATE_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": FavoriteCreate.model_json_schema(by_alias=True),
                "example": {"username": "alice"},
            }
        },
    }
}


@router.get("", response_model=list[Favorite])
async def list_favorites(
    service: FavoritesService = Depends(get_favorites_service),
) -> list[Favorite]:
    """Return every tracked username with its cached status."""

    with fault_boundary("Failed to load favorites"):
        return await service.list_favorites()


@router.post("", response_model=Favorite, openapi_extra=_FAVORITE_CREATE_BODY)
async def add_favorite(
    request: Request,
    service: FavoritesService = Depends(get_favorites_service),
) -> Favorite:
    """Start tracking a username.

    The raw body is decoded and validated by the service rather than FastAPI
    so that malformed JSON, malformed usernames and duplicates all answer
    with ``400 Bad Request``.
    """

    with fault_boundary("Failed to add favorite"):
        payload = decode_favorite_body(await request.body())
        return await service.add_favorite(payload)


@router.delete("/{username}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    username: str = Path(..., description="Username to stop tracking"),
    service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    """Stop tracking a username. Unknown usernames are ignored."""

    with fault_boundary("Failed to remove favorite"):
        await service.remove_favorite(username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{username}/status", status_code=status.HTTP_204_NO_CONTENT)
async def update_privacy_status(
    payload: FavoriteStatusUpdate,
    username: str = Path(..., description="Tracked username"),
    service: FavoritesService = Depends(get_favorites_service),
) -> Response:
    """Record the outcome of a privacy check for a tracked username."""

    with fault_boundary("Failed to update status"):
        await service.update_privacy_status(username, payload.is_private)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
