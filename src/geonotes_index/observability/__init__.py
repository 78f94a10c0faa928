"""
Observability Module - OpenTelemetry Integration

Provides tracing for note index operations.

USAGE:
------
# At application startup:
from geonotes_index.observability import init_tracing

init_tracing()  # Installs a TracerProvider if GEONOTES_TRACING_ENABLED=true

# In code that needs tracing:
from geonotes_index.observability import get_tracer

tracer = get_tracer()
with tracer.start_span("get_by_id", attributes=note_attributes(note_id)) as span:  # note_index.get_by_id
    # ... do work ...
    span.ok()
"""

from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from geonotes_index.observability.config import (
    TracingConfig,
    get_config,
    reset_config,
)
from geonotes_index.observability.tracer import (
    TracerProtocol,
    SpanProtocol,
    NoOpTracer,
    NoOpSpan,
    get_tracer,
    span_name,
    reset_tracer,
)
from geonotes_index.observability.attributes import (
    # Note
    NOTE_ID,
    NOTE_RECIPIENT,
    NOTE_FLAG,
    # Geo
    GEO_LATITUDE,
    GEO_LONGITUDE,
    GEO_RADIUS_KM,
    # Index
    INDEX_OPERATION,
    INDEX_ROWS_MAX,
    INDEX_RESULT_COUNT,
    INDEX_RESULT_DROPPED,
    INDEX_PURGE_COUNT,
    # Helpers
    note_attributes,
    nearby_attributes,
)

logger = logging.getLogger(__name__)

_tracing_initialized = False


def init_tracing(config: TracingConfig | None = None) -> bool:
    """
    Initialize OpenTelemetry tracing.

    This should be called once at application startup. Spans go to the
    OTLP/HTTP endpoint when one is configured, otherwise to stdout.

    Args:
        config: Optional config (uses env vars if not provided)

    Returns:
        True if tracing was initialized, False if disabled or failed
    """
    global _tracing_initialized
    if _tracing_initialized:
        return True

    config = config or get_config()

    if not config.enabled:
        logger.debug("Tracing disabled")
        return False

    try:
        if config.collector_endpoint:
            exporter = OTLPSpanExporter(endpoint=config.collector_endpoint)
            logger.info(f"Exporting spans to: {config.collector_endpoint}")
        else:
            exporter = ConsoleSpanExporter()
            logger.info("Exporting spans to console")

        provider = TracerProvider(
            resource=Resource.create({"service.name": config.service_name})
        )
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)

        reset_tracer()
        _tracing_initialized = True
        return True

    except Exception as e:
        logger.error(f"Failed to initialize tracing: {e}")
        return False


def shutdown_tracing() -> None:
    """Flush pending spans and reset tracer state."""
    global _tracing_initialized

    if not _tracing_initialized:
        return

    try:
        provider = trace.get_tracer_provider()
        if hasattr(provider, "shutdown"):
            provider.shutdown()
    except Exception as e:
        logger.warning(f"Error shutting down tracing: {e}")

    reset_tracer()
    reset_config()
    _tracing_initialized = False


__all__ = [
    # Initialization
    "init_tracing",
    "shutdown_tracing",
    # Config
    "TracingConfig",
    "get_config",
    "reset_config",
    # Tracer
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "span_name",
    "reset_tracer",
    # Attributes - Note
    "NOTE_ID",
    "NOTE_RECIPIENT",
    "NOTE_FLAG",
    # Attributes - Geo
    "GEO_LATITUDE",
    "GEO_LONGITUDE",
    "GEO_RADIUS_KM",
    # Attributes - Index
    "INDEX_OPERATION",
    "INDEX_ROWS_MAX",
    "INDEX_RESULT_COUNT",
    "INDEX_RESULT_DROPPED",
    "INDEX_PURGE_COUNT",
    # Helpers
    "note_attributes",
    "nearby_attributes",
]
