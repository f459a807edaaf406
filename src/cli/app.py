"""Main application setup for the cmdtrace CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Group, Parameter

from cli.commands.version import get_version
from cli.context import RunContext
from cli.result_action import cli_result_action
from cli.telemetry import invoke_with_telemetry
from obs.otel.bootstrap import configure_otel, shutdown_otel
from obs.otel.config import (
    TelemetryConfigOverrides,
    TraceExporterKind,
    resolve_telemetry_config,
)
from obs.otel.logging import configure_logging
from utils.uuid_factory import uuid7_str

_HELP_EPILOGUE = """
Examples:
  cmdtrace exec terraform plan          Run a tool with command telemetry
  cmdtrace telemetry show               Show effective telemetry configuration
  cmdtrace version                      Show version information

Environment Variables:
  CMDTRACE_LOG_LEVEL          Default log level (DEBUG, INFO, WARNING, ERROR)
  CMDTRACE_COLLECT_TELEMETRY  Set to "no" to disable telemetry
  CMDTRACE_TRACES_EXPORTER    Span exporter: none, console, memory
"""

session_group = Group("Session", help="Session and run context options.", sort_key=0)
observability_group = Group("Observability", help="Telemetry options.", sort_key=1)

app = App(
    name="cmdtrace",
    help="Run commands with privacy-safe OpenTelemetry command tracing.",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(show_default=True, show_env_var=True),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    run_id: Annotated[
        str | None,
        Parameter(
            name="--run-id",
            help="Explicit run identifier (UUID7 generated if not provided).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="CMDTRACE_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"


@dataclass(frozen=True)
class ObservabilityOptions:
    """Telemetry configuration parameters."""

    collect_telemetry: Annotated[
        bool | None,
        Parameter(
            name="--collect-telemetry",
            help="Collect command telemetry.",
            group=observability_group,
        ),
    ] = None
    traces_exporter: Annotated[
        TraceExporterKind | None,
        Parameter(
            name="--traces-exporter",
            help="Where finished spans are sent.",
            group=observability_group,
        ),
    ] = None


_DEFAULT_SESSION_OPTIONS = SessionOptions()
_DEFAULT_OBSERVABILITY_OPTIONS = ObservabilityOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
    observability: Annotated[ObservabilityOptions, Parameter(name="*")] = (
        _DEFAULT_OBSERVABILITY_OPTIONS
    ),
) -> int:
    """Meta launcher for telemetry bootstrap and context injection.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    configure_logging(session.log_level)
    telemetry = resolve_telemetry_config(
        TelemetryConfigOverrides(
            enabled=observability.collect_telemetry,
            exporter=observability.traces_exporter,
        )
    )
    configure_otel(telemetry)
    run_context = RunContext(
        run_id=session.run_id or uuid7_str(),
        log_level=session.log_level,
        telemetry=telemetry,
    )
    try:
        return invoke_with_telemetry(app, tokens, run_context=run_context)
    finally:
        shutdown_otel()


app.command("cli.commands.tool:exec_command", name="exec")
app.command("cli.commands.version:version_command", name="version", alias="v")

_telemetry_app = App(name="telemetry", help="Telemetry configuration.")
_telemetry_app.command("cli.commands.config:show_telemetry_config", name="show")
app.command(_telemetry_app)


def main() -> None:
    """Run the cmdtrace CLI."""
    raise SystemExit(app.meta())


__all__ = ["app", "main"]
