"""Request-scoped context metadata.

Every inbound HTTP call is tagged with a unique identifier by the middleware in
``privacy_checker.main``. The helpers below wrap the underlying ``ContextVar``
so middleware, exception handlers and tests read and write it the same way.
"""

from __future__ import annotations

from contextvars import ContextVar, Token

__all__ = [
    "REQUEST_ID_CONTEXT",
    "clear_request_id",
    "get_request_id",
    "set_request_id",
]

# Each request handler runs in its own task, so the ContextVar keeps the
# identifier isolated per request.
REQUEST_ID_CONTEXT: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(request_id: str) -> Token[str]:
    """Store ``request_id`` for the active context and return the reset token."""

    return REQUEST_ID_CONTEXT.set(request_id)


def get_request_id() -> str:
    """Return the current request identifier, or an empty string."""

    return REQUEST_ID_CONTEXT.get()


def clear_request_id(token: Token[str] | None = None) -> None:
    """Reset the request identifier.

    Supplying a token mirrors ``ContextVar.reset``; without one the value is
    explicitly set back to an empty string.
    """

    if token is not None:
        REQUEST_ID_CONTEXT.reset(token)
    else:
        REQUEST_ID_CONTEXT.set("")
