"""Telemetry instrumentation unit tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from battleships.engine.text import parse_board
from battleships.solver import loop as loop_module
from battleships.solver import solve
from battleships.telemetry import config as telemetry_config_module
from battleships.telemetry import logger as logger_module
from battleships.telemetry import metrics as metrics_module
from battleships.telemetry import tracer as tracer_module
from battleships.telemetry.config import TelemetryConfig

TELEMETRY_ENV = [
    "BATTLESHIPS_ENABLE_TRACING",
    "BATTLESHIPS_ENABLE_METRICS",
    "BATTLESHIPS_ENABLE_LOGGING",
    "OTEL_TRACES_ENABLED",
    "OTEL_METRICS_ENABLED",
    "OTEL_LOGS_ENABLED",
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT",
    "OTEL_EXPORTER_OTLP_METRICS_ENDPOINT",
    "OTEL_EXPORTER_OTLP_LOGS_ENDPOINT",
    "OTEL_SERVICE_NAME",
    "OTEL_SERVICE_NAMESPACE",
    "OTEL_RESOURCE_ATTRIBUTES",
]


class DummySpan:
    def __init__(self, names: list[str], span_name: str) -> None:
        self._names = names
        self._names.append(span_name)
        self.attributes: dict[str, object] = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    def set_attribute(self, key, value):
        self.attributes[key] = value


class DummyTracer:
    def __init__(self) -> None:
        self.span_names: list[str] = []

    def start_as_current_span(self, name: str):
        return DummySpan(self.span_names, name)


def reset_singletons() -> None:
    tracer_module._TRACER = None
    tracer_module._TRACER_PROVIDER = None
    metrics_module._METER = None
    metrics_module._METER_PROVIDER = None
    metrics_module._INSTRUMENTS = {}
    logger_module._LOGGER = None


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in TELEMETRY_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_lazy_init_tracer(monkeypatch: pytest.MonkeyPatch) -> None:
    reset_singletons()
    assert tracer_module.get_tracer() is tracer_module.get_tracer()

    provider_instance = MagicMock()
    provider_instance.get_tracer.return_value = MagicMock()
    monkeypatch.setattr(tracer_module, "TracerProvider", MagicMock(return_value=provider_instance))
    monkeypatch.setattr(tracer_module, "OTLPSpanExporter", MagicMock(return_value=MagicMock()))
    monkeypatch.setattr(tracer_module.trace, "set_tracer_provider", MagicMock())
    tracer_module.init_tracing(
        TelemetryConfig(enable_tracing=True, otlp_traces_endpoint="http://example")
    )
    assert tracer_module._TRACER is provider_instance.get_tracer.return_value

    meter_provider = MagicMock()
    meter_provider.get_meter.return_value = MagicMock()
    monkeypatch.setattr(metrics_module, "MeterProvider", MagicMock(return_value=meter_provider))
    monkeypatch.setattr(metrics_module, "OTLPMetricExporter", MagicMock(return_value=MagicMock()))
    monkeypatch.setattr(
        metrics_module, "PeriodicExportingMetricReader", MagicMock(return_value=MagicMock())
    )
    monkeypatch.setattr(metrics_module.otel_metrics, "set_meter_provider", MagicMock())
    metrics_module.init_metrics(
        TelemetryConfig(enable_metrics=True, otlp_metrics_endpoint="http://example")
    )
    assert metrics_module._METER is meter_provider.get_meter.return_value
    reset_singletons()


def test_record_solver_metric_reuses_counters(monkeypatch: pytest.MonkeyPatch) -> None:
    reset_singletons()
    meter = MagicMock()
    monkeypatch.setattr(metrics_module, "get_meter", lambda *_: meter)

    metrics_module.record_solver_metric("battleships_solver_passes", 1)
    metrics_module.record_solver_metric("battleships_solver_passes", 1, {"solved": True})

    meter.create_counter.assert_called_once_with("battleships_solver_passes", unit="1")
    counter = meter.create_counter.return_value
    assert counter.add.call_count == 2
    counter.add.assert_called_with(1, attributes={"solved": True})
    reset_singletons()


def test_get_logger_is_shared() -> None:
    reset_singletons()
    logger = logger_module.get_logger("test")
    assert logger_module.get_logger("other") is logger
    reset_singletons()


def test_init_telemetry_noop(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    monkeypatch.setattr(tracer_module, "init_tracing", lambda cfg: calls.append("tr"))
    monkeypatch.setattr(metrics_module, "init_metrics", lambda cfg: calls.append("me"))
    monkeypatch.setattr(logger_module, "init_logging", lambda cfg: calls.append("lo"))

    telemetry_config_module.init_telemetry(TelemetryConfig())
    assert calls == []


def test_init_telemetry_respects_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    monkeypatch.setattr(tracer_module, "init_tracing", lambda cfg: calls.append("tr"))
    monkeypatch.setattr(metrics_module, "init_metrics", lambda cfg: calls.append("me"))
    monkeypatch.setattr(logger_module, "init_logging", lambda cfg: calls.append("lo"))

    config = TelemetryConfig(enable_tracing=True, enable_logging=True)
    assert telemetry_config_module.init_telemetry(config) is config
    assert calls == ["tr", "lo"]


def test_from_env_reads_flags_and_endpoints(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("BATTLESHIPS_ENABLE_LOGGING", "yes")
    clean_env.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317/")
    clean_env.setenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT", "http://traces:4317")
    clean_env.setenv("OTEL_SERVICE_NAME", "solver-test")
    clean_env.setenv("OTEL_RESOURCE_ATTRIBUTES", "deployment.environment=ci, team = puzzles")

    config = TelemetryConfig.from_env()
    assert config.enable_logging
    assert config.enable_tracing
    assert config.enable_metrics
    assert config.otlp_traces_endpoint == "http://traces:4317"
    assert config.otlp_metrics_endpoint == "http://collector:4317/v1/metrics"
    assert config.otlp_logs_endpoint == "http://collector:4317/v1/logs"
    assert config.resource() == {
        "service.name": "solver-test",
        "service.namespace": "puzzles",
        "deployment.environment": "ci",
        "team": "puzzles",
    }


def test_from_env_defaults_to_disabled(clean_env: pytest.MonkeyPatch) -> None:
    config = TelemetryConfig.from_env()
    assert not (config.enable_tracing or config.enable_metrics or config.enable_logging)
    assert config.otlp_traces_endpoint is None


def test_load_telemetry_config_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    telemetry_config_module.load_telemetry_config.cache_clear()
    calls = {"count": 0}

    def fake_from_env(**overrides):
        calls["count"] += 1
        return TelemetryConfig(enable_tracing=True)

    monkeypatch.setattr(
        telemetry_config_module.TelemetryConfig,
        "from_env",
        classmethod(lambda cls, **overrides: fake_from_env(**overrides)),
    )

    first = telemetry_config_module.load_telemetry_config()
    second = telemetry_config_module.load_telemetry_config()
    assert first is second
    assert calls["count"] == 1
    telemetry_config_module.load_telemetry_config.cache_clear()


def test_solve_emits_spans_and_metrics(monkeypatch: pytest.MonkeyPatch) -> None:
    tracer = DummyTracer()
    metric_calls: list[tuple[str, float, dict | None]] = []

    monkeypatch.setattr(loop_module, "tracer", tracer)
    monkeypatch.setattr(
        loop_module,
        "record_solver_metric",
        lambda name, value, attrs=None: metric_calls.append((name, value, attrs)),
    )

    board = parse_board("ships: 4sq x 1.\n  01111\n4|~    \n")
    assert solve(board)

    assert tracer.span_names[0] == "solver.solve"
    assert tracer.span_names.count("solver.pass") == 2
    assert "solver.rule.fill_with_ships" in tracer.span_names
    assert "solver.rule.surround_middles_with_ships" in tracer.span_names

    names = [name for name, _, _ in metric_calls]
    assert names.count("battleships_solver_passes") == 2
    assert names.count("battleships_solver_rule_runs") == 16
    assert metric_calls[-1] == ("battleships_solver_solves", 1, {"solved": True})
    changed_rules = [
        attrs["rule"]
        for name, _, attrs in metric_calls
        if name == "battleships_solver_rule_runs" and attrs["changed"]
    ]
    assert changed_rules == ["fill_with_ships", "refine_ship_squares"]
