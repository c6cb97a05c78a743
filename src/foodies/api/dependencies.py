"""FastAPI dependencies for service access.

Services are cheap, request-scoped objects built around the request's
database session. Shared collaborators (settings, file storage) are created
once by the application factory and read from ``app.state``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from foodies.core.config import Settings, get_settings
from foodies.database import get_db_session
from foodies.services import (
    AuthService,
    Pagination,
    RecipeService,
    ReferenceDataService,
    TestimonialsService,
    UsersService,
)
from foodies.storage import FileStorage


DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


AppSettings = Annotated[Settings, Depends(get_app_settings)]


def get_file_storage(request: Request) -> FileStorage:
    """Get the file storage from app state.

    Raises:
        RuntimeError: If the application was not built by ``create_app``.
    """
    storage: FileStorage | None = getattr(request.app.state, "file_storage", None)
    if storage is None:
        msg = "File storage not configured"
        raise RuntimeError(msg)
    return storage


Storage = Annotated[FileStorage, Depends(get_file_storage)]


def get_pagination(
    settings: AppSettings,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[int | None, Query(ge=1, description="Page size")] = None,
) -> Pagination:
    """Page parameters, with ``limit`` defaulted and capped from settings."""
    if limit is None:
        limit = settings.pagination.default_limit
    return Pagination(page=page, limit=min(limit, settings.pagination.max_limit))


PageParams = Annotated[Pagination, Depends(get_pagination)]


# =============================================================================
# Services
# =============================================================================


def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(db)


def get_recipe_service(db: DbSession, storage: Storage) -> RecipeService:
    return RecipeService(db, storage)


def get_users_service(db: DbSession, storage: Storage) -> UsersService:
    return UsersService(db, storage)


def get_reference_data_service(db: DbSession) -> ReferenceDataService:
    return ReferenceDataService(db)


def get_testimonials_service(db: DbSession) -> TestimonialsService:
    return TestimonialsService(db)
