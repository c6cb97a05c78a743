"""Unit tests for tracing module.

Tests cover:
- Tracing setup and exporter selection
- Tracing shutdown
- Span attributes
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from opentelemetry.sdk.trace import TracerProvider

from foodies.core.config.settings import ObservabilitySettings, TracingSettings
from foodies.observability.tracing import (
    EXCLUDED_URLS,
    add_span_attributes,
    setup_tracing,
    shutdown_tracing,
)


if TYPE_CHECKING:
    from collections.abc import Generator

    from foodies.core.config import Settings


pytestmark = pytest.mark.unit


def _with_tracing(
    settings: Settings,
    *,
    enabled: bool = True,
    otlp_endpoint: str | None = None,
    env: str = "test",
) -> Settings:
    return settings.model_copy(
        update={
            "APP_ENV": env,
            "observability": ObservabilitySettings(
                tracing=TracingSettings(enabled=enabled, otlp_endpoint=otlp_endpoint)
            ),
        }
    )


@pytest.fixture
def otel() -> Generator[dict[str, MagicMock]]:
    """Patch the OpenTelemetry SDK objects used by setup_tracing."""
    with (
        patch("foodies.observability.tracing.Resource.create") as resource,
        patch("foodies.observability.tracing.TracerProvider") as provider,
        patch("foodies.observability.tracing.OTLPSpanExporter") as otlp,
        patch("foodies.observability.tracing.ConsoleSpanExporter") as console,
        patch("foodies.observability.tracing.BatchSpanProcessor"),
        patch("foodies.observability.tracing.trace.set_tracer_provider") as set_provider,
        patch("foodies.observability.tracing.FastAPIInstrumentor") as instrumentor,
    ):
        yield {
            "resource": resource,
            "provider": provider,
            "otlp": otlp,
            "console": console,
            "set_provider": set_provider,
            "instrumentor": instrumentor,
        }


class TestSetupTracing:
    """Tests for setup_tracing function."""

    def test_returns_early_when_disabled(
        self, settings: Settings, otel: dict[str, MagicMock]
    ) -> None:
        """Should neither install a provider nor instrument the app."""
        setup_tracing(MagicMock(), _with_tracing(settings, enabled=False))

        otel["set_provider"].assert_not_called()
        otel["instrumentor"].instrument_app.assert_not_called()

    def test_configures_otlp_exporter_when_endpoint_set(
        self, settings: Settings, otel: dict[str, MagicMock]
    ) -> None:
        """Should export spans over OTLP when an endpoint is configured."""
        setup_tracing(
            MagicMock(),
            _with_tracing(settings, otlp_endpoint="http://localhost:4317"),
        )

        otel["otlp"].assert_called_once_with(
            endpoint="http://localhost:4317",
            insecure=True,
        )
        otel["console"].assert_not_called()

    def test_configures_console_exporter_in_development(
        self, settings: Settings, otel: dict[str, MagicMock]
    ) -> None:
        """Should print spans to the console in development without OTLP."""
        setup_tracing(MagicMock(), _with_tracing(settings, env="development"))

        otel["console"].assert_called_once()
        otel["otlp"].assert_not_called()

    def test_no_exporter_outside_development(
        self, settings: Settings, otel: dict[str, MagicMock]
    ) -> None:
        """Should still install the provider when no exporter applies."""
        setup_tracing(MagicMock(), _with_tracing(settings))

        otel["otlp"].assert_not_called()
        otel["console"].assert_not_called()
        otel["set_provider"].assert_called_once_with(otel["provider"].return_value)

    def test_instruments_fastapi_with_exclusions(
        self, settings: Settings, otel: dict[str, MagicMock]
    ) -> None:
        """Should instrument the app, skipping health, metrics and docs."""
        app = MagicMock()

        setup_tracing(app, _with_tracing(settings))

        otel["instrumentor"].instrument_app.assert_called_once_with(
            app, excluded_urls=EXCLUDED_URLS
        )
        assert "health" in EXCLUDED_URLS
        assert "metrics" in EXCLUDED_URLS

    def test_resource_names_the_service(
        self, settings: Settings, otel: dict[str, MagicMock]
    ) -> None:
        """Should describe the service with name, version and environment."""
        setup_tracing(MagicMock(), _with_tracing(settings))

        attributes = otel["resource"].call_args.args[0]
        assert attributes["service.name"] == settings.app.name.lower().replace(" ", "-")
        assert attributes["service.version"] == settings.app.version
        assert attributes["deployment.environment"] == "test"


class TestShutdownTracing:
    """Tests for shutdown_tracing function."""

    def test_shuts_down_tracer_provider(self) -> None:
        """Should shutdown TracerProvider."""
        mock_provider = MagicMock(spec=TracerProvider)

        with patch(
            "foodies.observability.tracing.trace.get_tracer_provider",
            return_value=mock_provider,
        ):
            shutdown_tracing()

        mock_provider.shutdown.assert_called_once()

    def test_handles_non_tracer_provider(self) -> None:
        """Should do nothing for the default proxy provider."""
        mock_provider = MagicMock(spec=[])

        with patch(
            "foodies.observability.tracing.trace.get_tracer_provider",
            return_value=mock_provider,
        ):
            shutdown_tracing()


class TestAddSpanAttributes:
    """Tests for add_span_attributes function."""

    def test_sets_attributes_on_recording_span(self) -> None:
        """Should set each attribute on the current span."""
        span = MagicMock()
        span.is_recording.return_value = True

        with patch(
            "foodies.observability.tracing.trace.get_current_span",
            return_value=span,
        ):
            add_span_attributes(user_id="u-1", attempt=2)

        span.set_attribute.assert_any_call("user_id", "u-1")
        span.set_attribute.assert_any_call("attempt", 2)

    def test_skips_non_recording_span(self) -> None:
        """Should leave a non-recording span untouched."""
        span = MagicMock()
        span.is_recording.return_value = False

        with patch(
            "foodies.observability.tracing.trace.get_current_span",
            return_value=span,
        ):
            add_span_attributes(user_id="u-1")

        span.set_attribute.assert_not_called()
