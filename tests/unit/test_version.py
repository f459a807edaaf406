"""Tests for version and telemetry status reporting."""

from __future__ import annotations

import json

import pytest

from cli.commands.version import get_version, get_version_info, version_command
from cli.context import RunContext
from obs.otel.config import TelemetryConfigOverrides, TraceExporterKind, resolve_telemetry_config


def test_version_info_reports_configured_exporter() -> None:
    """Report the exporter spans are sent to when telemetry is on."""
    config = resolve_telemetry_config(
        TelemetryConfigOverrides(
            enabled=True,
            exporter=TraceExporterKind.CONSOLE,
            service_name="ci",
        ),
    )
    info = get_version_info(config)
    assert info["cmdtrace"] == get_version()
    assert info["telemetry"] == {"enabled": True, "exporter": "console", "service_name": "ci"}


def test_version_info_omits_exporter_when_disabled() -> None:
    """Report no exporter when telemetry is off."""
    config = resolve_telemetry_config(TelemetryConfigOverrides(enabled=False))
    telemetry = get_version_info(config)["telemetry"]
    assert telemetry["enabled"] is False
    assert telemetry["exporter"] is None


def test_version_info_resolves_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fall back to the environment when no configuration is given."""
    monkeypatch.setenv("CMDTRACE_COLLECT_TELEMETRY", "no")
    assert get_version_info()["telemetry"]["enabled"] is False


def test_version_command_uses_run_context(capsys: pytest.CaptureFixture[str]) -> None:
    """Print the injected configuration as JSON."""
    config = resolve_telemetry_config(
        TelemetryConfigOverrides(enabled=True, exporter=TraceExporterKind.MEMORY),
    )
    context = RunContext(run_id="run-7", log_level="INFO", telemetry=config)
    assert version_command(run_context=context) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["telemetry"]["exporter"] == "memory"
