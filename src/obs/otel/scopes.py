"""Canonical OpenTelemetry instrumentation scopes for cmdtrace."""

from __future__ import annotations

from obs.otel.constants import ScopeName

SCOPE_ROOT = ScopeName.ROOT
SCOPE_CLI = ScopeName.CLI
SCOPE_OBS = ScopeName.OBS

__all__ = ["SCOPE_CLI", "SCOPE_OBS", "SCOPE_ROOT"]
