"""User endpoints.

Provides:
- GET /users and GET /users/{user_id}
- GET /users/me with the caller's counters
- PATCH /users/me/avatar for multipart avatar upload
- GET /users/me/followers and GET /users/me/following
- GET /users/me/sessions and DELETE /users/me/sessions/{session_id}
- POST and DELETE /users/{user_id}/follow
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from foodies.api.dependencies import AppSettings, Storage, get_users_service
from foodies.auth.dependencies import CurrentSession
from foodies.schemas import (
    AvatarResponse,
    CurrentUserResponse,
    SessionResponse,
    UserResponse,
)
from foodies.services import UsersService
from foodies.services.errors import ImageRequiredError
from foodies.storage import save_upload


if TYPE_CHECKING:
    from pathlib import Path


router = APIRouter(prefix="/users", tags=["Users"])

UsersServiceDep = Annotated[UsersService, Depends(get_users_service)]


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(
    auth: CurrentSession,
    service: UsersServiceDep,
) -> list[UserResponse]:
    return await service.get_users()


# =============================================================================
# Current user
# =============================================================================


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="The caller's profile",
)
async def current_user(
    auth: CurrentSession,
    service: UsersServiceDep,
) -> CurrentUserResponse:
    """Profile with recipe, favorite, follower and following counts."""
    return await service.get_current_user(auth.user_id)


@router.patch(
    "/me/avatar",
    response_model=AvatarResponse,
    summary="Replace the caller's avatar",
    responses={
        400: {"description": "Missing or unsupported image"},
        413: {"description": "Image too large"},
    },
)
async def update_avatar(
    auth: CurrentSession,
    service: UsersServiceDep,
    storage: Storage,
    settings: AppSettings,
    avatar: Annotated[UploadFile | None, File(description="Avatar image")] = None,
) -> AvatarResponse:
    if avatar is None:
        raise ImageRequiredError("Avatar file is required")

    temp_path: Path = await save_upload(avatar, settings.tmp_dir, settings.uploads)
    try:
        return await service.update_avatar(auth.user_id, temp_path)
    except Exception:
        await storage.delete(temp_path)
        raise


@router.get(
    "/me/followers",
    response_model=list[UserResponse],
    summary="Users following the caller",
)
async def my_followers(
    auth: CurrentSession,
    service: UsersServiceDep,
) -> list[UserResponse]:
    return await service.get_followers(auth.user_id)


@router.get(
    "/me/following",
    response_model=list[UserResponse],
    summary="Users the caller follows",
)
async def my_following(
    auth: CurrentSession,
    service: UsersServiceDep,
) -> list[UserResponse]:
    return await service.get_following(auth.user_id)


@router.get(
    "/me/sessions",
    response_model=list[SessionResponse],
    summary="The caller's sessions",
)
async def my_sessions(
    auth: CurrentSession,
    service: UsersServiceDep,
) -> list[SessionResponse]:
    return await service.get_user_sessions(auth.user_id)


@router.delete(
    "/me/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Close one of the caller's sessions",
    responses={404: {"description": "Session not found"}},
)
async def close_session(
    session_id: str,
    auth: CurrentSession,
    service: UsersServiceDep,
) -> None:
    """Revoke a session; its token stops authenticating immediately."""
    await service.close_user_session(auth.user_id, session_id)


# =============================================================================
# Other users
# =============================================================================


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: str,
    auth: CurrentSession,
    service: UsersServiceDep,
) -> UserResponse:
    return await service.get_user(user_id)


@router.post(
    "/{user_id}/follow",
    status_code=status.HTTP_201_CREATED,
    summary="Follow a user",
    responses={
        400: {"description": "Cannot follow yourself"},
        404: {"description": "User not found"},
    },
)
async def follow_user(
    user_id: str,
    auth: CurrentSession,
    service: UsersServiceDep,
) -> None:
    await service.follow_user(auth.user_id, user_id)


@router.delete(
    "/{user_id}/follow",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unfollow a user",
    responses={404: {"description": "Not following this user"}},
)
async def unfollow_user(
    user_id: str,
    auth: CurrentSession,
    service: UsersServiceDep,
) -> None:
    await service.unfollow_user(auth.user_id, user_id)
