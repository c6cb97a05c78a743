"""Root endpoint providing service information."""

from __future__ import annotations

from fastapi import APIRouter

from foodies.api.dependencies import AppSettings
from foodies.schemas import RootResponse


router = APIRouter(tags=["Root"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="Root endpoint",
    description="Welcome message and basic service information.",
)
async def root(settings: AppSettings) -> RootResponse:
    """Return basic service information. Does not require authentication."""
    return RootResponse(
        message=f"Welcome to {settings.app.name}",
        service=settings.app.name,
        version=settings.app.version,
        docs="/docs" if settings.api.docs_enabled else None,
    )
