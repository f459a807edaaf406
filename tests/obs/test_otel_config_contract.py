"""Contract tests for telemetry configuration resolution."""

from __future__ import annotations

import pytest

from obs.otel.config import (
    TelemetryConfigOverrides,
    TraceExporterKind,
    resolve_telemetry_config,
)
from utils.env_utils import env_bool, env_enum, env_list

_ENV_VARS = (
    "OTEL_SDK_DISABLED",
    "CMDTRACE_COLLECT_TELEMETRY",
    "CMDTRACE_TRACES_EXPORTER",
    "OTEL_SERVICE_NAME",
    "OTEL_TRACES_SAMPLER_ARG",
    "OTEL_ATTRIBUTE_COUNT_LIMIT",
    "OTEL_ATTRIBUTE_VALUE_LENGTH_LIMIT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Enable telemetry without an exporter by default."""
    config = resolve_telemetry_config()
    assert config.enabled is True
    assert config.exporter is TraceExporterKind.NONE
    assert config.service_name == "cmdtrace"
    assert config.sampler_ratio == 1.0
    assert config.attribute_count_limit is None


def test_environment_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Read exporter, service name and limits from the environment."""
    monkeypatch.setenv("CMDTRACE_TRACES_EXPORTER", "Console")
    monkeypatch.setenv("OTEL_SERVICE_NAME", "ci-cmdtrace")
    monkeypatch.setenv("OTEL_TRACES_SAMPLER_ARG", "0.25")
    monkeypatch.setenv("OTEL_ATTRIBUTE_COUNT_LIMIT", "64")
    config = resolve_telemetry_config()
    assert config.exporter is TraceExporterKind.CONSOLE
    assert config.service_name == "ci-cmdtrace"
    assert config.sampler_ratio == 0.25
    assert config.attribute_count_limit == 64


@pytest.mark.parametrize(
    ("name", "value"),
    [("CMDTRACE_COLLECT_TELEMETRY", "no"), ("OTEL_SDK_DISABLED", "true")],
)
def test_opt_out(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    """Disable telemetry through either opt-out variable."""
    monkeypatch.setenv(name, value)
    assert resolve_telemetry_config().enabled is False


def test_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prefer explicit overrides over the environment."""
    monkeypatch.setenv("CMDTRACE_COLLECT_TELEMETRY", "0")
    monkeypatch.setenv("CMDTRACE_TRACES_EXPORTER", "console")
    config = resolve_telemetry_config(
        TelemetryConfigOverrides(enabled=True, exporter=TraceExporterKind.MEMORY)
    )
    assert config.enabled is True
    assert config.exporter is TraceExporterKind.MEMORY


def test_out_of_range_sampler_ratio(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Fall back to sampling everything for invalid ratios."""
    monkeypatch.setenv("OTEL_TRACES_SAMPLER_ARG", "1.5")
    with caplog.at_level("WARNING"):
        config = resolve_telemetry_config()
    assert config.sampler_ratio == 1.0
    assert "OTEL_TRACES_SAMPLER_ARG" in caplog.text


def test_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore unparseable enum and boolean values."""
    monkeypatch.setenv("CMDTRACE_TRACES_EXPORTER", "jaeger")
    monkeypatch.setenv("CMDTRACE_COLLECT_TELEMETRY", "maybe")
    config = resolve_telemetry_config()
    assert config.exporter is TraceExporterKind.NONE
    assert config.enabled is True


def test_fingerprint_payload_is_plain() -> None:
    """Expose the configuration as JSON-friendly values."""
    payload = resolve_telemetry_config().fingerprint_payload()
    assert payload["exporter"] == "none"
    assert payload["enabled"] is True


def test_env_helpers(monkeypatch: pytest.MonkeyPatch) -> None:
    """Parse lists, booleans and enum members."""
    monkeypatch.setenv("CMDTRACE_TEST_LIST", " a, ,b ")
    monkeypatch.setenv("CMDTRACE_TEST_BOOL", "On")
    monkeypatch.setenv("CMDTRACE_TEST_ENUM", "MEMORY")
    assert env_list("CMDTRACE_TEST_LIST") == ["a", "b"]
    assert env_bool("CMDTRACE_TEST_BOOL") is True
    assert env_bool("CMDTRACE_TEST_MISSING", default=False) is False
    assert (
        env_enum("CMDTRACE_TEST_ENUM", TraceExporterKind, default=TraceExporterKind.NONE)
        is TraceExporterKind.MEMORY
    )
