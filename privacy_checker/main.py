import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .api import check, favorites
from .errors import (
    DuplicateFavoriteError,
    FavoriteNotFoundError,
    InternalFaultError,
    UsernameValidationError,
)
from .schemas.error import ErrorType
from .services.dependencies import build_favorites_store, build_privacy_lookup
from .services.favorites import FavoritesStore
from .services.privacy_service import PrivacyLookup
from .settings import DEFAULT_LOG_LEVEL, AppSettings, get_settings
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    validation_details,
)
from .utils.request_context import get_request_id, set_request_id

logging.basicConfig(
    level=DEFAULT_LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _validate_environment(active_settings: AppSettings | None = None) -> None:
    """Log warnings for optional configuration left unset."""

    candidate = active_settings or get_settings()
    warnings = candidate.optional_config_warnings()

    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def _default_origins() -> list[str]:
    ports = list(range(3000, 3011)) + [5000, 5173]
    origins = []
    for host in ("localhost", "127.0.0.1"):
        origins.extend([f"http://{host}:{port}" for port in ports])
    return origins


def _combine_origins(*origin_groups: list[str]) -> list[str]:
    """Merge origins preserving order and removing duplicates."""
    seen: set[str] = set()
    combined: list[str] = []
    for group in origin_groups:
        for origin in group:
            normalized = origin.rstrip("/")
            if normalized and normalized not in seen:
                seen.add(normalized)
                combined.append(normalized)
    return combined


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the favorites store on startup and release it on shutdown."""
    active_settings: AppSettings = app.state.settings
    _validate_environment(active_settings)

    store: FavoritesStore = app.state.favorites_store
    logger.info("=" * 60)
    logger.info("Account Privacy Checker API - startup")
    logger.info("Favorites backend: %s", active_settings.favorites_backend.upper())
    logger.info("Strict favorite lookups: %s", active_settings.strict_favorite_lookups)
    logger.info("=" * 60)
    await store.initialize()

    yield

    logger.info("Shutting down Account Privacy Checker API")
    await store.close()


# Exception handlers
async def username_validation_exception_handler(
    request: Request, exc: UsernameValidationError
):
    """Reject malformed usernames with ``400 Bad Request``."""
    errors = validation_details(exc.errors)

    logger.warning(
        "Username validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message=exc.message,
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


async def duplicate_favorite_exception_handler(
    request: Request, exc: DuplicateFavoriteError
):
    """Duplicates share the ``400`` status with validation failures."""
    logger.warning(
        "Duplicate favorite for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc.username,
    )

    error_response = build_error_response(
        error_type=ErrorType.DUPLICATE_ERROR,
        message=exc.message,
        detail=f"'{exc.username}' is already tracked",
        status_code=status.HTTP_400_BAD_REQUEST,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(mode="json"),
    )


async def favorite_not_found_exception_handler(
    request: Request, exc: FavoriteNotFoundError
):
    """Only reachable when strict favorite lookups are enabled."""
    logger.warning(
        "Unknown favorite for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc.username,
    )

    error_response = build_error_response(
        error_type=ErrorType.NOT_FOUND,
        message=exc.message,
        detail=f"'{exc.username}' is not tracked",
        status_code=status.HTTP_404_NOT_FOUND,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_response.model_dump(mode="json"),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    errors = validation_details(exc.errors())

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=422,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=422,
        content=error_response.model_dump(mode="json"),
    )


async def internal_fault_exception_handler(request: Request, exc: InternalFaultError):
    """Answer with the route's public message; the cause is only logged."""
    logger.error(
        "Internal fault for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        exc.message,
        exc_info=exc.__cause__ or exc,
    )

    error_type = (
        ErrorType.DATABASE_ERROR
        if isinstance(exc.__cause__, SQLAlchemyError)
        else ErrorType.INTERNAL_ERROR
    )
    error_response = build_error_response(
        error_type=error_type,
        message=exc.message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def create_app(
    settings: AppSettings | None = None,
    *,
    store: FavoritesStore | None = None,
    privacy_lookup: PrivacyLookup | None = None,
) -> FastAPI:
    """Build the application with its own favorites store and lookup.

    Collaborators default to the ones described by ``settings``; tests pass
    explicit instances instead.
    """
    active_settings = settings if settings is not None else get_settings()
    logging.getLogger().setLevel(active_settings.log_level_numeric)

    application = FastAPI(
        title="Account Privacy Checker API",
        version="0.1.0",
        description="Check whether accounts are private and keep a list of favorites.",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    application.state.settings = active_settings
    # Stores may be empty containers, so test for None rather than truthiness.
    application.state.favorites_store = (
        store if store is not None else build_favorites_store(active_settings)
    )
    application.state.privacy_lookup = (
        privacy_lookup
        if privacy_lookup is not None
        else build_privacy_lookup(active_settings)
    )

    allow_origins = _combine_origins(_default_origins(), active_settings.cors_allow_origins)
    logger.debug("Configured CORS allow_origins: %s", ", ".join(allow_origins))
    application.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.middleware("http")(add_request_id)

    application.add_exception_handler(
        UsernameValidationError, username_validation_exception_handler
    )
    application.add_exception_handler(
        DuplicateFavoriteError, duplicate_favorite_exception_handler
    )
    application.add_exception_handler(
        FavoriteNotFoundError, favorite_not_found_exception_handler
    )
    application.add_exception_handler(
        RequestValidationError, validation_exception_handler
    )
    application.add_exception_handler(
        InternalFaultError, internal_fault_exception_handler
    )
    application.add_exception_handler(Exception, generic_exception_handler)

    @application.get("/health", tags=["system"])
    async def healthcheck() -> dict[str, str]:
        """Simple health endpoint for readiness checks."""
        return {"status": "ok"}

    application.include_router(check.router, prefix="/api", tags=["check"])
    application.include_router(
        favorites.router, prefix="/api/favorites", tags=["favorites"]
    )
    return application


app = create_app()
