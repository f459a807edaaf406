"""Tests for parsing and running commands under telemetry."""

from __future__ import annotations

import json
import sys
from typing import Annotated

import pytest
from cyclopts import App, Parameter
from opentelemetry.trace import StatusCode

from cli.app import app as cmdtrace_app
from cli.commands.tool import exec_command
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.result import ActionResult
from cli.telemetry import invoke_with_telemetry
from errors import HttpRequest, HttpResponse, ServiceResponseError, ToolExitError
from obs.otel.anonymize import tool_name_from_path
from obs.otel.config import TelemetryConfigOverrides, resolve_telemetry_config
from obs.otel.constants import AttributeName
from obs.otel.run_context import get_last_trace_id, get_run_id
from tests.obs._support.otel_harness import OtelHarness

_app = App(name="cmdtrace")
_seen_run_ids: list[str | None] = []


@_app.command
def deploy(
    env: str,
    *,
    force: bool = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> ActionResult:
    """Pretend to deploy."""
    _seen_run_ids.append(run_context.run_id if run_context is not None else None)
    _seen_run_ids.append(get_run_id())
    return ActionResult.success()


@_app.command
def fail() -> None:
    """Fail with a service error."""
    request = HttpRequest(method="PUT", host="management.azure.com")
    raise ServiceResponseError("Conflict", HttpResponse(409, request))


@_app.command
def build(
    output_dir: Annotated[str, Parameter(name=["--out", "-o"])] = "dist",
    *,
    verbose: Annotated[bool, Parameter(name=["--verbose", "-v"])] = False,
) -> None:
    """Pretend to build."""


def _run_context() -> RunContext:
    return RunContext(
        run_id="run-42",
        log_level="WARNING",
        telemetry=resolve_telemetry_config(TelemetryConfigOverrides(enabled=True)),
    )


def test_invoke_records_flags_and_injects_context(otel_harness: OtelHarness) -> None:
    """Inject the run context and report flag names only."""
    _seen_run_ids.clear()
    exit_code = invoke_with_telemetry(
        _app,
        ["deploy", "prod-secret-env", "--force"],
        run_context=_run_context(),
    )
    assert exit_code == ExitCode.SUCCESS
    assert _seen_run_ids == ["run-42", "run-42"]
    assert get_run_id() is None
    (span,) = otel_harness.finished_spans("cmd.deploy")
    attrs = dict(span.attributes or {})
    assert tuple(attrs[AttributeName.CMD_FLAGS]) == ("force",)
    assert attrs[AttributeName.CMD_ARGS_COUNT] == 1
    assert attrs[AttributeName.RUN_ID] == "run-42"
    assert "prod-secret-env" not in str(attrs)


def test_invoke_records_renamed_and_short_flags(otel_harness: OtelHarness) -> None:
    """Attribute renamed and short flags to their declared names."""
    tokens = ["build", "--out", "out/secret", "-v"]
    exit_code = invoke_with_telemetry(_app, tokens, run_context=None)
    assert exit_code == ExitCode.SUCCESS
    (span,) = otel_harness.finished_spans("cmd.build")
    attrs = dict(span.attributes or {})
    assert tuple(attrs[AttributeName.CMD_FLAGS]) == ("out", "verbose")
    assert attrs[AttributeName.CMD_ARGS_COUNT] == 0
    assert "out/secret" not in str(attrs)


def test_invoke_counts_positional_value_of_renamed_parameter(otel_harness: OtelHarness) -> None:
    """Count a value as positional only when it was given by position."""
    exit_code = invoke_with_telemetry(_app, ["build", "out/secret"], run_context=None)
    assert exit_code == ExitCode.SUCCESS
    (span,) = otel_harness.finished_spans("cmd.build")
    attrs = dict(span.attributes or {})
    assert tuple(attrs[AttributeName.CMD_FLAGS]) == ()
    assert attrs[AttributeName.CMD_ARGS_COUNT] == 1


def test_invoke_names_span_after_canonical_command(
    otel_harness: OtelHarness,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Name the span after the registered command when an alias is typed."""
    exit_code = invoke_with_telemetry(cmdtrace_app, ["v"], run_context=_run_context())
    assert exit_code == ExitCode.SUCCESS
    assert len(otel_harness.finished_spans("cmd.version")) == 1
    assert otel_harness.finished_spans("cmd.v") == []
    payload = json.loads(capsys.readouterr().out)
    assert payload["telemetry"]["enabled"] is True


def test_invoke_maps_failures_to_exit_codes(
    otel_harness: OtelHarness,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Return the domain exit code and print the trace id."""
    exit_code = invoke_with_telemetry(_app, ["fail"], run_context=None)
    assert exit_code == ExitCode.SERVICE_ERROR
    (span,) = otel_harness.finished_spans("cmd.fail")
    assert span.status.status_code is StatusCode.ERROR
    assert span.status.description == "service.arm.409"
    trace_id = get_last_trace_id()
    assert trace_id is not None
    assert f"TraceID: {trace_id}" in capsys.readouterr().err


def test_invoke_parse_error_creates_no_span(otel_harness: OtelHarness) -> None:
    """Report parse errors before any command span starts."""
    exit_code = invoke_with_telemetry(_app, ["deploy"], run_context=None)
    assert exit_code == ExitCode.PARSE_ERROR
    assert otel_harness.finished_spans() == []


def test_telemetry_show_uses_run_context(
    otel_harness: OtelHarness,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Print the injected telemetry configuration."""
    exit_code = invoke_with_telemetry(
        cmdtrace_app,
        ["telemetry", "show"],
        run_context=_run_context(),
    )
    assert exit_code == ExitCode.SUCCESS
    payload = json.loads(capsys.readouterr().out)
    assert payload["run_id"] == "run-42"
    assert payload["enabled"] is True
    assert len(otel_harness.finished_spans("cmd.telemetry.show")) == 1


def test_exec_command_raises_tool_error() -> None:
    """Raise a tool error carrying the exit code."""
    with pytest.raises(ToolExitError) as excinfo:
        exec_command(sys.executable, "-c", "import sys; sys.exit(3)")
    assert excinfo.value.exit_code == 3
    assert excinfo.value.cmd == sys.executable


def test_exec_command_missing_tool() -> None:
    """Report a missing executable as exit code 127."""
    with pytest.raises(ToolExitError) as excinfo:
        exec_command("cmdtrace-definitely-missing-tool")
    assert excinfo.value.exit_code == 127


def test_exec_command_success() -> None:
    """Return a success result with the run duration."""
    result = exec_command(sys.executable, "-c", "pass")
    assert result.ok
    assert result.metrics["duration_ms"] >= 0.0


def test_invoke_exec_failure_span(otel_harness: OtelHarness) -> None:
    """Name the tool span status after the normalized executable."""
    exit_code = invoke_with_telemetry(
        cmdtrace_app,
        ["exec", sys.executable, "-c", "import sys; sys.exit(5)"],
        run_context=None,
    )
    assert exit_code == ExitCode.TOOL_ERROR
    (span,) = otel_harness.finished_spans("cmd.exec")
    assert span.status.description == f"tool.{tool_name_from_path(sys.executable)}.failed"
    assert dict(span.attributes or {})["error.tool.exit.code"] == 5
