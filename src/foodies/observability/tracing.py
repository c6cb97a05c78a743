"""OpenTelemetry distributed tracing configuration.

This module provides:
- FastAPI instrumentation
- OTLP export, or console export in development
- Span annotation for the authenticated caller
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from foodies.core.config import get_settings
from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from foodies.core.config import Settings

logger = get_logger(__name__)

EXCLUDED_URLS = "health,metrics,docs,redoc,openapi.json,public"


def setup_tracing(app: FastAPI, settings: Settings | None = None) -> None:
    """Configure OpenTelemetry tracing.

    Args:
        app: The FastAPI application instance.
        settings: Optional settings override. If not provided, uses get_settings().
    """
    if settings is None:
        settings = get_settings()

    tracing = settings.observability.tracing
    if not tracing.enabled:
        logger.info("Tracing disabled")
        return

    resource = Resource.create(
        {
            "service.name": settings.app.name.lower().replace(" ", "-"),
            "service.version": settings.app.version,
            "deployment.environment": settings.APP_ENV,
        }
    )
    provider = TracerProvider(resource=resource)

    if tracing.otlp_endpoint:
        exporter = OTLPSpanExporter(endpoint=tracing.otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        logger.info("OTLP trace exporter configured", endpoint=tracing.otlp_endpoint)
    elif settings.is_development:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console trace exporter configured (development mode)")

    trace.set_tracer_provider(provider)
    FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)

    logger.info("OpenTelemetry tracing configured")


def shutdown_tracing() -> None:
    """Flush pending spans. Called during application shutdown."""
    provider = trace.get_tracer_provider()
    if isinstance(provider, TracerProvider):
        provider.shutdown()
        logger.info("Tracing shutdown complete")


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


__all__ = [
    "add_span_attributes",
    "setup_tracing",
    "shutdown_tracing",
]
