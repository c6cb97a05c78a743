"""Rate limiting using SlowAPI.

This module provides:
- A process-wide limiter with a default limit for every route
- A stricter, IP-keyed limit for the authentication endpoints
- A 429 handler rendering the standard error body
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from foodies.core.config import get_settings
from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

    from foodies.core.config import Settings

logger = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later"


def _get_rate_limit_key(request: Request) -> str:
    """Key by authenticated user when known, otherwise by client address."""
    auth = getattr(request.state, "auth", None)
    if auth is not None:
        return f"user:{auth.user_id}"
    return str(get_remote_address(request))


def _get_auth_rate_limit_key(request: Request) -> str:
    """Auth endpoints are always keyed by client address."""
    return f"auth:{get_remote_address(request)}"


def create_limiter(settings: Settings | None = None) -> Limiter:
    """Create the limiter from the rate limiting settings."""
    settings = settings or get_settings()

    return Limiter(
        key_func=_get_rate_limit_key,
        default_limits=[settings.rate_limiting.default],
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
        enabled=settings.rate_limiting.enabled,
    )


limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Render a 429 with the standard error body and a Retry-After header."""
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )

    retry_after = str(exc.limit.limit.get_expiry()) if exc.limit else "60"
    return ORJSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "RATE_LIMIT_EXCEEDED",
            "message": RATE_LIMIT_MESSAGE,
            "requestId": getattr(request.state, "request_id", None),
        },
        headers={"Retry-After": retry_after},
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter, its middleware and its exception handler."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    logger.info("Rate limiting configured", enabled=limiter.enabled)


def _auth_limit() -> str:
    """Auth limit, read per request so configuration changes apply."""
    return get_settings().rate_limiting.auth


def rate_limit_auth() -> Any:
    """Apply the auth-specific limit (stricter, IP-based).

    All decorated endpoints share one counter per client address.
    The decorated endpoint must accept ``request: Request`` and
    ``response: Response`` parameters.

    Example:
        @router.post("/login")
        @rate_limit_auth()
        async def login(request: Request, response: Response, ...):
            ...
    """
    return limiter.shared_limit(
        _auth_limit,
        scope="auth",
        key_func=_get_auth_rate_limit_key,
    )
