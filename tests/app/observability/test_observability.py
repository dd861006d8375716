"""Testes de observabilidade: root trace id, tracing e métricas."""

from __future__ import annotations

import logging
import math
from unittest.mock import MagicMock

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import INVALID_SPAN_CONTEXT, NonRecordingSpan, format_trace_id

from app.observability import (
    bind_root_trace_id,
    end_task,
    generate_root_trace_id,
    get_root_trace_id,
    init_tracing,
    record_fanout,
    record_latency,
    record_rejection,
    reset_root_trace_id,
    scalar_attributes,
    start_root_span,
    trace_id_of,
)
from app.observability import tracing


class TestRootTraceId:
    def test_bind_and_reset(self) -> None:
        token = bind_root_trace_id("abc")
        assert get_root_trace_id() == "abc"
        reset_root_trace_id(token)
        assert get_root_trace_id() == ""

    def test_bind_without_value_generates(self) -> None:
        token = bind_root_trace_id()
        try:
            assert len(get_root_trace_id()) == 32
        finally:
            reset_root_trace_id(token)

    def test_generated_ids_are_unique_hex(self) -> None:
        first, second = generate_root_trace_id(), generate_root_trace_id()
        assert first != second
        int(first, 16)


class TestScalarAttributes:
    def test_skips_containers_and_none(self) -> None:
        attributes = scalar_attributes(
            {
                "device": "1A2345",
                "seqNumber": 12,
                "snr": 18.86,
                "ack": False,
                "nested": {"a": 1},
                "items": [1, 2],
                "empty": None,
            }
        )
        assert attributes == {"device": "1A2345", "seqNumber": 12, "snr": 18.86, "ack": False}

    def test_nan_becomes_string(self) -> None:
        assert scalar_attributes({"rssi": math.nan}) == {"rssi": "NaN"}


class TestTracing:
    def test_start_root_span_and_end_task(self) -> None:
        span = start_root_span("sigfox_callback")
        end_task(span)
        assert not span.is_recording()

    def test_trace_id_of_recording_span(self) -> None:
        span = TracerProvider().get_tracer("sigfox-test").start_span("sigfox_callback")

        trace_id = trace_id_of(span)

        assert trace_id == format_trace_id(span.get_span_context().trace_id)
        assert len(trace_id) == 32
        span.end()

    def test_trace_id_of_noop_span_is_empty(self) -> None:
        assert trace_id_of(NonRecordingSpan(INVALID_SPAN_CONTEXT)) == ""

    def test_end_task_flushes_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        provider = MagicMock()
        monkeypatch.setattr(tracing.trace, "get_tracer_provider", lambda: provider)
        span = MagicMock()

        end_task(span)

        span.end.assert_called_once()
        provider.force_flush.assert_called_once()

    def test_end_task_without_span(self, monkeypatch: pytest.MonkeyPatch) -> None:
        provider = MagicMock()
        monkeypatch.setattr(tracing.trace, "get_tracer_provider", lambda: provider)
        end_task(None)
        provider.force_flush.assert_called_once()

    def test_init_tracing_is_idempotent(self, monkeypatch: pytest.MonkeyPatch) -> None:
        set_provider = MagicMock()
        monkeypatch.setattr(tracing, "_tracing_initialized", False)
        monkeypatch.setattr(tracing.trace, "set_tracer_provider", set_provider)

        assert init_tracing("sigfox-callback") is True
        assert init_tracing("sigfox-callback") is False
        set_provider.assert_called_once()

    @pytest.mark.parametrize(
        "endpoint",
        ["http://collector:4318", "http://collector:4318/", "http://collector:4318/v1/traces"],
    )
    def test_http_endpoint_suffix(self, endpoint: str) -> None:
        assert tracing._normalize_http_endpoint(endpoint) == "http://collector:4318/v1/traces"


class TestMetrics:
    def test_metric_lines(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
            record_latency("fanout", "dispatch", 12.3456)
            record_fanout("redis", 3, 1, correlation_id="abc")
            record_rejection("stale_message")

        latency, fanout, rejection = caplog.records
        assert latency.getMessage() == "metric_latency"
        assert latency.latency_ms == 12.35
        assert fanout.targets == 3
        assert fanout.failed == 1
        assert fanout.correlation_id == "abc"
        assert rejection.reason == "stale_message"
