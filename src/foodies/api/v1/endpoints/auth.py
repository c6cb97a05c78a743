"""Authentication endpoints.

Provides:
- POST /auth/register for creating an account and its first session
- POST /auth/login for opening a new session
- POST /auth/logout for closing the current session

Register and login share a stricter, per-address rate limit.
"""

# Postponed annotations are not used here: the rate limit decorator wraps the
# endpoints, and FastAPI resolves string annotations against the wrapper.

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response, status

from foodies.api.dependencies import get_auth_service
from foodies.auth.dependencies import CurrentSession
from foodies.core.rate_limit import rate_limit_auth
from foodies.schemas import AuthResponse, LoginRequest, RegisterRequest
from foodies.services import AuthService


router = APIRouter(prefix="/auth", tags=["Auth"])


def _session_data(request: Request, extra: dict[str, Any] | None) -> dict[str, Any]:
    """Client metadata stored on a new session."""
    data: dict[str, Any] = {
        "ip": request.client.host if request.client else None,
        "userAgent": request.headers.get("user-agent"),
    }
    data.update(extra or {})
    return data


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"description": "Request validation error"},
        409: {"description": "Email is already registered"},
        429: {"description": "Too many requests"},
    },
)
@rate_limit_auth()
async def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create an account and return a token bound to a fresh session."""
    return await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
        avatar=body.avatar,
        session_data=_session_data(request, body.session_data),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    responses={
        400: {"description": "Request validation error"},
        401: {"description": "Invalid email or password"},
        429: {"description": "Too many requests"},
    },
)
@rate_limit_auth()
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Verify credentials and open a new session."""
    return await service.login(
        email=body.email,
        password=body.password,
        session_data=_session_data(request, body.session_data),
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Log out",
    responses={401: {"description": "Authentication required"}},
)
async def logout(
    auth: CurrentSession,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> None:
    """Close the session the bearer token is bound to.

    The token stops authenticating immediately.
    """
    await service.logout(auth.session_id)
