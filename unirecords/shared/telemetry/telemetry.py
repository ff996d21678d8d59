"""OpenTelemetry tracing setup for the search service.

Exporters: console (development), OTLP gRPC, Jaeger via its OTLP port, or
none. Instrumentation covers FastAPI requests, record source SQL queries
and log records (trace_id/span_id injection).
"""

import logging
import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from unirecords.core.config import Settings

logger = logging.getLogger(__name__)


def _build_exporter(settings: Settings) -> SpanExporter | None:
    """Return the span exporter for settings.telemetry_exporter (None for 'none')."""
    kind = settings.telemetry_exporter
    if kind == "none":
        return None
    if kind == "otlp" and settings.telemetry_otlp_endpoint:
        endpoint = settings.telemetry_otlp_endpoint
        return OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
    if kind == "jaeger" and settings.telemetry_jaeger_endpoint:
        return OTLPSpanExporter(
            endpoint=f"{settings.telemetry_jaeger_endpoint}:4317", insecure=True
        )
    if kind != "console":
        logger.warning("Exporter '%s' has no endpoint configured, using console", kind)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Owns the tracer provider for the process and its instrumentations."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None

    @property
    def active(self) -> bool:
        return self.tracer_provider is not None

    def setup_telemetry(self) -> TracerProvider | None:
        """Create and register the global tracer provider. Returns None if disabled or on failure."""
        if not self.settings.telemetry_enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            resource = Resource(
                attributes={
                    SERVICE_NAME: self.settings.app_name,
                    SERVICE_VERSION: self.settings.app_version,
                    "deployment.environment": self.settings.telemetry_environment,
                }
            )
            provider = TracerProvider(
                resource=resource,
                sampler=TraceIdRatioBased(self.settings.telemetry_sample_rate),
            )
            exporter = _build_exporter(self.settings)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
            self.tracer_provider = provider
            logger.info(
                "OpenTelemetry initialized: service=%s, exporter=%s",
                self.settings.app_name,
                self.settings.telemetry_exporter,
            )
            return provider
        except Exception as e:
            logger.exception("Failed to initialize telemetry: %s", e)
            return None

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Instrument FastAPI (requests, duration, status, exceptions)."""
        if not self.active:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app,
                tracer_provider=self.tracer_provider,
                excluded_urls="/api/v1/health",
            )
        except Exception as e:
            logger.exception("Failed to instrument FastAPI: %s", e)

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Instrument record source queries."""
        if not self.active:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
            )
        except Exception as e:
            logger.exception("Failed to instrument SQLAlchemy: %s", e)

    def instrument_logging(self) -> None:
        """Add trace_id and span_id to log records."""
        if not self.active:
            return
        try:
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider,
                set_logging_format=True,
            )
        except Exception as e:
            logger.exception("Failed to instrument logging: %s", e)

    def shutdown(self) -> None:
        """Flush remaining spans and shut the provider down."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception as e:
            logger.exception("Error during telemetry shutdown: %s", e)
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance (set at startup)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear, with None) the process telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
