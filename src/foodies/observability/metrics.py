"""Prometheus metrics instrumentation.

This module provides:
- Automatic request metrics for every API route
- The metrics endpoint under the API prefix
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_fastapi_instrumentator import Instrumentator, metrics

from foodies.core.config import get_settings
from foodies.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from foodies.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "foodies"
METRIC_SUBSYSTEM = "http"


def setup_metrics(app: FastAPI, settings: Settings | None = None) -> Instrumentator:
    """Configure Prometheus metrics instrumentation.

    Collects request count, latency, request and response sizes and
    in-progress requests, grouped by route template. Health, metrics,
    documentation and static file requests are not instrumented.

    Args:
        app: The FastAPI application instance.
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        The Instrumentator, unconfigured when metrics are disabled.
    """
    if settings is None:
        settings = get_settings()

    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.prefix
    metrics_endpoint = f"{prefix}/metrics"

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            metrics_endpoint,
            "/openapi.json",
            "/docs",
            "/redoc",
            f"{settings.storage.public_url_prefix}.*",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem=METRIC_SUBSYSTEM,
            should_only_respect_2xx_for_highr=False,
        )
    )
    for size_metric in (metrics.request_size, metrics.response_size):
        instrumentator.add(
            size_metric(
                should_include_handler=True,
                should_include_method=True,
                should_include_status=True,
                metric_namespace=METRIC_NAMESPACE,
                metric_subsystem=METRIC_SUBSYSTEM,
            )
        )

    instrumentator.instrument(app)
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)
    return instrumentator


__all__ = ["setup_metrics"]
