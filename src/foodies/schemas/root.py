"""Root and health endpoint schemas."""

from __future__ import annotations

from pydantic import Field

from foodies.schemas.base import APIResponse


class RootResponse(APIResponse):
    """Basic service information returned by ``GET /``."""

    message: str = Field(..., examples=["Welcome to Foodies API"])
    service: str = Field(..., examples=["Foodies API"])
    version: str = Field(..., examples=["1.0.0"])
    docs: str | None = Field(default=None, description="API documentation URL")


class HealthResponse(APIResponse):
    """Liveness plus dependency status."""

    status: str = Field(..., examples=["healthy", "degraded"])
    version: str
    checks: dict[str, str] = Field(default_factory=dict)
