"""
Distributed tracing for the task service using OpenTelemetry.

Spans are no-ops until setup_tracing() installs a tracer provider, which
the application lifespan does on startup.
"""
import logging
from typing import Optional, Dict, Any
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlite3 import SQLite3Instrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from taskmind import __version__
from taskmind.config import Settings

logger = logging.getLogger(__name__)

_tracer: Optional[trace.Tracer] = None


def setup_tracing(settings: Settings) -> None:
    """Initialize OpenTelemetry tracing for the service."""
    global _tracer

    if _tracer is not None:
        logger.warning("Tracing already initialized")
        return

    resource = Resource.create({
        "service.name": settings.otel_service_name,
        "service.version": __version__,
    })
    provider = TracerProvider(resource=resource)

    if settings.otel_otlp_enabled:
        try:
            otlp_exporter = OTLPSpanExporter(endpoint=settings.otel_otlp_endpoint, insecure=True)
            provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
            logger.info("OTLP exporter configured", extra={"endpoint": settings.otel_otlp_endpoint})
        except Exception:
            logger.warning("Failed to configure OTLP exporter", exc_info=True)

    if settings.otel_console_enabled:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console exporter enabled")

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(__name__)
    logger.info("OpenTelemetry tracing initialized successfully")


def instrument_fastapi(app) -> None:
    """Instrument FastAPI application with OpenTelemetry."""
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumentation enabled")
    except Exception:
        logger.error("Failed to instrument FastAPI", exc_info=True)


def instrument_database() -> None:
    """Instrument sqlite3 with OpenTelemetry."""
    try:
        SQLite3Instrumentor().instrument()
        logger.info("SQLite3 instrumentation enabled")
    except Exception:
        logger.error("Failed to instrument SQLite3", exc_info=True)


def instrument_httpx() -> None:
    """Instrument HTTPX client (oracle calls) with OpenTelemetry."""
    try:
        HTTPXClientInstrumentor().instrument()
        logger.info("HTTPX instrumentation enabled")
    except Exception:
        logger.error("Failed to instrument HTTPX", exc_info=True)


def get_tracer() -> trace.Tracer:
    """Get the service tracer, or the global (possibly no-op) one."""
    return _tracer or trace.get_tracer(__name__)


@contextmanager
def trace_span(
    name: str,
    attributes: Optional[Dict[str, Any]] = None,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL
):
    """
    Context manager for creating a trace span.

    Args:
        name: Name of the span
        attributes: Optional attributes to add to the span (None values are skipped)
        kind: Span kind (INTERNAL, SERVER, CLIENT, etc.)

    Example:
        with trace_span("mcp.create_task", {"mcp.title": title}):
            ...
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    if isinstance(value, (str, int, float, bool)):
                        span.set_attribute(key, value)
                    else:
                        span.set_attribute(key, str(value))

        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
            raise


def add_span_attribute(key: str, value: Any) -> None:
    """Add an attribute to the current active span."""
    span = trace.get_current_span()
    if span:
        if isinstance(value, (str, int, float, bool)):
            span.set_attribute(key, value)
        else:
            span.set_attribute(key, str(value))
