"""Version and telemetry status reporting for the cmdtrace CLI."""

from __future__ import annotations

import json
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Annotated

from cyclopts import Parameter

from cli.context import RunContext
from obs.otel.config import TelemetryConfig, resolve_telemetry_config

_DIST_NAME = "cmdtrace"
_DEV_VERSION = "0.0.0-dev"


def get_version() -> str:
    """Get the cmdtrace package version string.

    Returns:
    -------
    str
        Version string, or "0.0.0-dev" if not installed.
    """
    return _package_version(_DIST_NAME) or _DEV_VERSION


def get_version_info(telemetry: TelemetryConfig | None = None) -> dict[str, object]:
    """Describe the installed build and where its telemetry goes.

    Parameters
    ----------
    telemetry
        Effective telemetry configuration; resolved from the environment
        when omitted.

    Returns
    -------
    dict[str, object]
        Version payload with a ``telemetry`` status section.
    """
    config = telemetry if telemetry is not None else resolve_telemetry_config()
    return {
        "cmdtrace": get_version(),
        "python": sys.version.split()[0],
        "opentelemetry": _package_version("opentelemetry-sdk"),
        "telemetry": {
            "enabled": config.enabled,
            "exporter": str(config.exporter) if config.enabled else None,
            "service_name": config.service_name,
        },
    }


def version_command(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the cmdtrace version and whether telemetry is collected.

    Returns:
    -------
    int
        Exit status code.
    """
    telemetry = run_context.telemetry if run_context is not None else None
    payload = json.dumps(get_version_info(telemetry), indent=2, sort_keys=True)
    sys.stdout.write(payload + "\n")
    return 0


def _package_version(name: str) -> str | None:
    try:
        return pkg_version(name)
    except PackageNotFoundError:
        return None


__all__ = ["get_version", "get_version_info", "version_command"]
