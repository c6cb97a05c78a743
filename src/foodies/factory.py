"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers and rate limiting
- Mounts the API router and the public static files
- Sets up tracing and Prometheus metrics
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles

from foodies.api.v1.endpoints import root
from foodies.api.v1.router import router as v1_router
from foodies.core.config import Settings, get_settings
from foodies.core.events import lifespan
from foodies.core.exceptions import setup_exception_handlers
from foodies.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from foodies.core.rate_limit import setup_rate_limiting
from foodies.observability import setup_metrics, setup_tracing
from foodies.storage import FileStorage


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.api.docs_enabled
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description=settings.app.description,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        default_response_class=ORJSONResponse,
        debug=settings.app.debug,
    )

    # Shared collaborators for dependencies
    app.state.settings = settings
    app.state.file_storage = FileStorage(
        settings.public_dir,
        settings.storage.public_url_prefix,
    )

    setup_exception_handlers(app)
    setup_rate_limiting(app)
    _setup_middleware(app, settings)
    _setup_routes(app, settings)

    # Observability hooks need the routes mounted
    setup_tracing(app, settings)
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. Order from the
    request perspective:
    1. SecurityHeadersMiddleware (hardening headers)
    2. RequestIDMiddleware (request id and fresh log context)
    3. LoggingMiddleware (access log and timing)
    4. GZipMiddleware (compresses responses)
    5. CORSMiddleware (handles CORS)
    6. SlowAPIMiddleware (default rate limit, added by setup_rate_limiting)
    """
    prefix = settings.api.prefix

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        LoggingMiddleware,
        exclude_prefixes=(
            f"{prefix}/health",
            f"{prefix}/metrics",
            settings.storage.public_url_prefix,
            "/favicon.ico",
        ),
    )
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, api_prefix=prefix)


def _setup_routes(app: FastAPI, settings: Settings) -> None:
    """Mount the API router, the root endpoint and the public files."""
    app.include_router(root.router)
    app.include_router(v1_router, prefix=settings.api.prefix)

    # check_dir=False: the lifespan creates the directory on startup
    app.mount(
        settings.storage.public_url_prefix,
        StaticFiles(directory=settings.public_dir, check_dir=False),
        name="public",
    )
