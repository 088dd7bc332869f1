"""Tests for telemetry adapters.

The OpenTelemetry adapter must work with and without the optional SDK.
"""

from yarnbot.infrastructure.telemetry.otel_adapter import (
    NoopTelemetry,
    OpenTelemetryAdapter,
    OtelConfig,
)


def test_noop_telemetry_accepts_everything():
    t = NoopTelemetry()
    assert t.incr("chat.queries.total", {"band": "high"}) is None
    assert t.observe("chat.top_score", 0.5) is None


def test_otel_config_defaults():
    cfg = OtelConfig()
    assert cfg.service_name == "yarnbot"
    assert cfg.otlp_endpoint is None


def test_otel_adapter_never_raises():
    adapter = OpenTelemetryAdapter(OtelConfig(environment="test"))
    adapter.incr("chat.queries.total", {"band": "high", "topic": "price"})
    adapter.incr("chat.queries.total")
    adapter.observe("chat.top_score", 0.42)
    assert isinstance(adapter.enabled, bool)
