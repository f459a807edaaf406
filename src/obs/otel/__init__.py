"""OpenTelemetry helpers for cmdtrace observability."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from obs.otel.anonymize import resolve_service, tool_name_from_path
    from obs.otel.baggage import baggage_attributes, set_baggage_in_context
    from obs.otel.bootstrap import OtelProviders, configure_otel, shutdown_otel
    from obs.otel.config import (
        TelemetryConfig,
        TelemetryConfigOverrides,
        TraceExporterKind,
        resolve_telemetry_config,
    )
    from obs.otel.constants import AttributeName, error_key
    from obs.otel.events import command_event_name
    from obs.otel.logging import configure_logging
    from obs.otel.run_context import (
        get_last_trace_id,
        get_run_id,
        reset_run_id,
        set_last_trace_id,
        set_run_id,
    )
    from obs.otel.scopes import SCOPE_CLI, SCOPE_OBS, SCOPE_ROOT
    from obs.otel.tracing import get_tracer, set_span_attributes, span_trace_id
    from obs.otel.usage import (
        UsageAttributes,
        process_usage_attributes,
        set_usage_attribute,
    )

__all__ = [
    "SCOPE_CLI",
    "SCOPE_OBS",
    "SCOPE_ROOT",
    "AttributeName",
    "OtelProviders",
    "TelemetryConfig",
    "TelemetryConfigOverrides",
    "TraceExporterKind",
    "UsageAttributes",
    "baggage_attributes",
    "command_event_name",
    "configure_logging",
    "configure_otel",
    "error_key",
    "get_last_trace_id",
    "get_run_id",
    "get_tracer",
    "process_usage_attributes",
    "reset_run_id",
    "resolve_service",
    "resolve_telemetry_config",
    "set_baggage_in_context",
    "set_last_trace_id",
    "set_run_id",
    "set_span_attributes",
    "set_usage_attribute",
    "shutdown_otel",
    "span_trace_id",
    "tool_name_from_path",
]

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "SCOPE_CLI": ("obs.otel.scopes", "SCOPE_CLI"),
    "SCOPE_OBS": ("obs.otel.scopes", "SCOPE_OBS"),
    "SCOPE_ROOT": ("obs.otel.scopes", "SCOPE_ROOT"),
    "AttributeName": ("obs.otel.constants", "AttributeName"),
    "OtelProviders": ("obs.otel.bootstrap", "OtelProviders"),
    "TelemetryConfig": ("obs.otel.config", "TelemetryConfig"),
    "TelemetryConfigOverrides": ("obs.otel.config", "TelemetryConfigOverrides"),
    "TraceExporterKind": ("obs.otel.config", "TraceExporterKind"),
    "UsageAttributes": ("obs.otel.usage", "UsageAttributes"),
    "baggage_attributes": ("obs.otel.baggage", "baggage_attributes"),
    "command_event_name": ("obs.otel.events", "command_event_name"),
    "configure_logging": ("obs.otel.logging", "configure_logging"),
    "configure_otel": ("obs.otel.bootstrap", "configure_otel"),
    "error_key": ("obs.otel.constants", "error_key"),
    "get_last_trace_id": ("obs.otel.run_context", "get_last_trace_id"),
    "get_run_id": ("obs.otel.run_context", "get_run_id"),
    "get_tracer": ("obs.otel.tracing", "get_tracer"),
    "process_usage_attributes": ("obs.otel.usage", "process_usage_attributes"),
    "reset_run_id": ("obs.otel.run_context", "reset_run_id"),
    "resolve_service": ("obs.otel.anonymize", "resolve_service"),
    "resolve_telemetry_config": ("obs.otel.config", "resolve_telemetry_config"),
    "set_baggage_in_context": ("obs.otel.baggage", "set_baggage_in_context"),
    "set_last_trace_id": ("obs.otel.run_context", "set_last_trace_id"),
    "set_run_id": ("obs.otel.run_context", "set_run_id"),
    "set_span_attributes": ("obs.otel.tracing", "set_span_attributes"),
    "set_usage_attribute": ("obs.otel.usage", "set_usage_attribute"),
    "shutdown_otel": ("obs.otel.bootstrap", "shutdown_otel"),
    "span_trace_id": ("obs.otel.tracing", "span_trace_id"),
    "tool_name_from_path": ("obs.otel.anonymize", "tool_name_from_path"),
}


def __getattr__(name: str) -> object:
    export = _EXPORT_MAP.get(name)
    if export is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    module_name, attr_name = export
    module = importlib.import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(__all__)
