"""Run context for CLI command injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from obs.otel.config import TelemetryConfig


@dataclass(frozen=True)
class RunContext:
    """Injected run context for CLI commands.

    Parameters
    ----------
    run_id
        Run identifier for the CLI invocation.
    log_level
        Logging level applied to the invocation.
    telemetry
        Resolved telemetry configuration.
    """

    run_id: str
    log_level: str
    telemetry: TelemetryConfig | None = None


__all__ = ["RunContext"]
