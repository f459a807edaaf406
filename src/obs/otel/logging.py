"""Trace-correlated logging for the cmdtrace CLI."""

from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

TRACE_LOG_FORMAT = "%(asctime)s %(levelname)s [trace_id=%(trace_id)s] %(name)s: %(message)s"


class TraceContextFilter(logging.Filter):
    """Stamp log records with the current trace and span ids."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject ``trace_id``/``span_id`` into the record.

        Returns
        -------
        bool
            Always True; records are never dropped.
        """
        context = trace.get_current_span().get_span_context()
        if context.is_valid:
            record.trace_id = format_trace_id(context.trace_id)
            record.span_id = format_span_id(context.span_id)
        else:
            record.trace_id = None
            record.span_id = None
        return True


def configure_logging(level: str, *, fmt: str = TRACE_LOG_FORMAT) -> None:
    """Configure root logging with trace ids on every record.

    Parameters
    ----------
    level
        Logging level name, such as ``"INFO"``.
    fmt
        Record format; may reference ``trace_id`` and ``span_id``.
    """
    logging.basicConfig(level=level.upper(), format=fmt)
    root = logging.getLogger()
    for handler in root.handlers:
        if not any(isinstance(existing, TraceContextFilter) for existing in handler.filters):
            handler.addFilter(TraceContextFilter())


__all__ = ["TRACE_LOG_FORMAT", "TraceContextFilter", "configure_logging"]
