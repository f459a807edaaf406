"""Tracing helpers for cmdtrace instrumentation."""

from __future__ import annotations

from collections.abc import Mapping

from opentelemetry import trace
from opentelemetry.trace import Span, format_trace_id

from obs.otel.attributes import normalize_attributes
from obs.otel.scope_metadata import instrumentation_schema_url, instrumentation_version


def get_tracer(scope_name: str) -> trace.Tracer:
    """Return a tracer for the given instrumentation scope.

    Parameters
    ----------
    scope_name
        Instrumentation scope name.

    Returns
    -------
    opentelemetry.trace.Tracer
        Tracer bound to the requested scope.
    """
    version_value = instrumentation_version()
    version = version_value if version_value is not None else "unknown"
    return trace.get_tracer(
        scope_name,
        instrumenting_library_version=version,
        schema_url=instrumentation_schema_url(),
    )


def set_span_attributes(span: Span, attrs: Mapping[str, object] | None) -> None:
    """Attach normalized attributes to a span.

    Parameters
    ----------
    span
        Span to update.
    attrs
        Raw attributes to normalize and attach.
    """
    normalized = normalize_attributes(attrs)
    if normalized:
        span.set_attributes(normalized)


def span_trace_id(span: Span) -> str:
    """Return the span's trace id as 32 lowercase hex digits.

    Returns
    -------
    str
        Formatted trace id; all zeros for non-recording spans.
    """
    return format_trace_id(span.get_span_context().trace_id)


__all__ = ["get_tracer", "set_span_attributes", "span_trace_id"]
