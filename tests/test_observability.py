"""
Tests for the observability module.

Covers tracing config, the NoOp fallbacks, the OTel wrappers and the span
attribute helpers. The global provider is never touched: OTel tests use a
local SDK provider with an in-memory exporter.
"""

from unittest.mock import MagicMock, patch

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from geonotes_index.observability import (
    GEO_RADIUS_KM,
    INDEX_OPERATION,
    INDEX_RESULT_COUNT,
    INDEX_ROWS_MAX,
    NOTE_FLAG,
    NOTE_ID,
    NOTE_RECIPIENT,
    NoOpSpan,
    NoOpTracer,
    TracingConfig,
    get_config,
    get_tracer,
    init_tracing,
    nearby_attributes,
    note_attributes,
    reset_config,
    reset_tracer,
    span_name,
)
from geonotes_index.observability.tracer import OTelSpan, OTelTracer


@pytest.fixture(autouse=True)
def clean_state():
    """Reset global tracer/config singletons around each test."""
    reset_config()
    reset_tracer()
    yield
    reset_config()
    reset_tracer()


# ---------------------------------------------------------------------------
# CONFIG
# ---------------------------------------------------------------------------


class TestTracingConfig:
    """Tests for TracingConfig."""

    def test_defaults(self):
        config = TracingConfig()

        assert config.enabled is False
        assert config.service_name == "geonotes-index"
        assert config.collector_endpoint is None

    @pytest.mark.parametrize("value", ["true", "1", "yes", "TRUE"])
    def test_enabled_from_env(self, value):
        with patch.dict("os.environ", {"GEONOTES_TRACING_ENABLED": value}):
            assert TracingConfig.from_env().enabled is True

    def test_disabled_from_env(self):
        with patch.dict("os.environ", {"GEONOTES_TRACING_ENABLED": "off"}):
            assert TracingConfig.from_env().enabled is False

    def test_endpoint_and_service_name(self):
        env = {
            "GEONOTES_SERVICE_NAME": "notes-api",
            "OTEL_EXPORTER_OTLP_ENDPOINT": "http://collector:4318/v1/traces",
        }
        with patch.dict("os.environ", env):
            config = TracingConfig.from_env()

        assert config.service_name == "notes-api"
        assert config.collector_endpoint == "http://collector:4318/v1/traces"

    def test_empty_endpoint_is_none(self):
        with patch.dict("os.environ", {"OTEL_EXPORTER_OTLP_ENDPOINT": ""}):
            assert TracingConfig.from_env().collector_endpoint is None

    def test_get_config_is_cached(self):
        assert get_config() is get_config()


# ---------------------------------------------------------------------------
# TRACER FACTORY
# ---------------------------------------------------------------------------


class TestGetTracer:
    """Tests for get_tracer fallbacks."""

    def test_disabled_returns_noop(self):
        with patch.dict("os.environ", {"GEONOTES_TRACING_ENABLED": "false"}):
            assert isinstance(get_tracer(), NoOpTracer)

    def test_enabled_without_provider_returns_noop(self):
        """Enabled but init_tracing never ran: no SDK provider installed."""
        with patch.dict("os.environ", {"GEONOTES_TRACING_ENABLED": "true"}):
            with patch("geonotes_index.observability.tracer.trace.get_tracer_provider") as provider:
                provider.return_value = MagicMock()
                assert isinstance(get_tracer(), NoOpTracer)

    def test_tracer_is_cached(self):
        assert get_tracer() is get_tracer()

    def test_init_tracing_disabled(self):
        assert init_tracing(TracingConfig(enabled=False)) is False


# ---------------------------------------------------------------------------
# SPANS
# ---------------------------------------------------------------------------


@pytest.fixture
def exporter():
    """In-memory span exporter behind a local (non-global) SDK provider."""
    return InMemorySpanExporter()


@pytest.fixture
def otel_tracer(exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return OTelTracer(provider.get_tracer("geonotes-index-tests"))


class TestNoOp:
    """Tests for the NoOp implementations."""

    def test_noop_span_accepts_everything(self):
        span = NoOpSpan()

        span.set_attribute("k", "v")
        span.ok()
        span.fail(RuntimeError("boom"))

    def test_noop_tracer_yields_span(self):
        with NoOpTracer().start_span("get_by_id", attributes={"a": 1}) as span:
            assert isinstance(span, NoOpSpan)

    def test_noop_tracer_propagates_exceptions(self):
        with pytest.raises(RuntimeError):
            with NoOpTracer().start_span("get_by_id"):
                raise RuntimeError("boom")


class TestOTelTracer:
    """Tests for OTelTracer against a real SDK provider."""

    def test_span_named_after_operation(self, otel_tracer, exporter):
        with otel_tracer.start_span("get_by_id", attributes={NOTE_ID: "x"}) as span:
            assert isinstance(span, OTelSpan)
            span.ok()

        (finished,) = exporter.get_finished_spans()
        assert finished.name == span_name("get_by_id") == "note_index.get_by_id"
        assert finished.attributes[INDEX_OPERATION] == "get_by_id"
        assert finished.attributes[NOTE_ID] == "x"
        assert finished.status.status_code is StatusCode.OK

    def test_fail_records_exception(self, otel_tracer, exporter):
        with pytest.raises(ValueError):
            with otel_tracer.start_span("purge") as span:
                error = ValueError("index down")
                span.fail(error)
                raise error

        (finished,) = exporter.get_finished_spans()
        assert finished.status.status_code is StatusCode.ERROR
        assert finished.status.description == "index down"
        assert [event.name for event in finished.events] == ["exception"]

    def test_unreported_exception_still_recorded(self, otel_tracer, exporter):
        with pytest.raises(KeyError):
            with otel_tracer.start_span("find_nearby"):
                raise KeyError("boom")

        (finished,) = exporter.get_finished_spans()
        assert finished.status.status_code is StatusCode.ERROR
        assert len(finished.events) == 1

    def test_set_attribute(self, otel_tracer, exporter):
        with otel_tracer.start_span("find_nearby") as span:
            span.set_attribute(INDEX_RESULT_COUNT, 2)

        (finished,) = exporter.get_finished_spans()
        assert finished.attributes[INDEX_RESULT_COUNT] == 2

    def test_wraps_mocked_tracer(self):
        otel = MagicMock()

        with OTelTracer(otel).start_span("mark_read", attributes={NOTE_FLAG: "read"}):
            pass

        otel.start_as_current_span.assert_called_once_with(
            "note_index.mark_read",
            attributes={INDEX_OPERATION: "mark_read", NOTE_FLAG: "read"},
            record_exception=False,
            set_status_on_exception=False,
        )


# ---------------------------------------------------------------------------
# ATTRIBUTES
# ---------------------------------------------------------------------------


class TestAttributes:
    """Tests for the attribute helpers."""

    def test_note_attributes(self):
        assert note_attributes("abc") == {NOTE_ID: "abc"}

    def test_note_attributes_with_flag(self):
        attrs = note_attributes("abc", flag="read")

        assert attrs[NOTE_FLAG] == "read"

    def test_nearby_attributes(self):
        attrs = nearby_attributes("r-1", 40.8, -73.9, 0.5, 10)

        assert INDEX_OPERATION not in attrs
        assert attrs[NOTE_RECIPIENT] == "r-1"
        assert attrs[GEO_RADIUS_KM] == 0.5
        assert attrs[INDEX_ROWS_MAX] == 10
