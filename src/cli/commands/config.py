"""Telemetry configuration commands."""

from __future__ import annotations

import json
import sys
from typing import Annotated

from cyclopts import Parameter

from cli.context import RunContext
from obs.otel.config import resolve_telemetry_config


def show_telemetry_config(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective telemetry configuration.

    Returns:
    -------
    int
        Exit status code.
    """
    if run_context is not None and run_context.telemetry is not None:
        config = run_context.telemetry
    else:
        config = resolve_telemetry_config()
    payload = dict(config.fingerprint_payload())
    if run_context is not None:
        payload["run_id"] = run_context.run_id
    sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True) + "\n")
    return 0


__all__ = ["show_telemetry_config"]
