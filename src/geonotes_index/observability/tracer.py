"""
Operation spans for the note index.

The engine opens one span per operation with tracer.start_span(operation,
attributes). The tracer names the span "note_index.<operation>" and tags it
with index.operation, so callers only pass the operation-specific
attributes. Inside the span the engine reports the outcome with ok() or
fail(exc).

get_tracer() hands out an OTelTracer once init_tracing() has installed an
SDK provider, and a NoOpTracer otherwise.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, ContextManager, Iterator, Protocol

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import Status, StatusCode

from geonotes_index.observability.attributes import INDEX_OPERATION

SPAN_PREFIX = "note_index"


def span_name(operation: str) -> str:
    """Span name for an engine operation, e.g. note_index.get_by_id."""
    return f"{SPAN_PREFIX}.{operation}"


# ---------------------------------------------------------------------------
# PROTOCOLS
# ---------------------------------------------------------------------------


class SpanProtocol(Protocol):
    """What an engine operation can do with its span."""

    def set_attribute(self, key: str, value: Any) -> None:
        ...

    def ok(self) -> None:
        """Mark the operation as succeeded."""
        ...

    def fail(self, exception: BaseException) -> None:
        """Record exception on the span and mark the operation as failed."""
        ...


class TracerProtocol(Protocol):
    def start_span(
        self, operation: str, attributes: dict[str, Any] | None = None
    ) -> ContextManager[SpanProtocol]:
        ...


# ---------------------------------------------------------------------------
# NOOP (tracing disabled)
# ---------------------------------------------------------------------------


class NoOpSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def ok(self) -> None:
        pass

    def fail(self, exception: BaseException) -> None:
        pass


class NoOpTracer:
    @contextmanager
    def start_span(
        self, operation: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[NoOpSpan]:
        yield NoOpSpan()


# ---------------------------------------------------------------------------
# OPENTELEMETRY
# ---------------------------------------------------------------------------


class OTelSpan:
    """Adapts an OTel span to SpanProtocol."""

    def __init__(self, span: trace.Span):
        self._span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self._span.set_attribute(key, value)

    def ok(self) -> None:
        self._span.set_status(Status(StatusCode.OK))

    def fail(self, exception: BaseException) -> None:
        self._span.record_exception(exception)
        self._span.set_status(Status(StatusCode.ERROR, str(exception)))


class OTelTracer:
    """
    Opens note index spans on an OTel tracer.

    OTel's own exception recording is switched off: the engine reports
    failures through fail(), after wrapping them in its own error types.
    An exception that escapes the span without fail() is still recorded.
    """

    def __init__(self, tracer: trace.Tracer):
        self._tracer = tracer

    @contextmanager
    def start_span(
        self, operation: str, attributes: dict[str, Any] | None = None
    ) -> Iterator[OTelSpan]:
        attrs = {INDEX_OPERATION: operation, **(attributes or {})}
        with self._tracer.start_as_current_span(
            span_name(operation),
            attributes=attrs,
            record_exception=False,
            set_status_on_exception=False,
        ) as raw:
            span = OTelSpan(raw)
            try:
                yield span
            except Exception as e:
                if raw.is_recording() and not _has_error_status(raw):
                    span.fail(e)
                raise


def _has_error_status(span: Any) -> bool:
    status = getattr(span, "status", None)
    return status is not None and status.status_code is StatusCode.ERROR


# ---------------------------------------------------------------------------
# FACTORY
# ---------------------------------------------------------------------------


_tracer: TracerProtocol | None = None


def get_tracer(service_name: str | None = None) -> TracerProtocol:
    """
    Get the global tracer instance.

    Args:
        service_name: Instrumentation name (used on first call only)
    """
    global _tracer
    if _tracer is not None:
        return _tracer

    from geonotes_index.observability.config import get_config

    config = get_config()
    provider = trace.get_tracer_provider()
    if config.enabled and isinstance(provider, TracerProvider):
        _tracer = OTelTracer(provider.get_tracer(service_name or config.service_name))
    else:
        # disabled, or init_tracing has not run yet
        _tracer = NoOpTracer()
    return _tracer


def reset_tracer() -> None:
    """Reset tracer (useful for testing)."""
    global _tracer
    _tracer = None
