"""Custom OpenTelemetry span processors for cmdtrace."""

from __future__ import annotations

from opentelemetry.context import Context
from opentelemetry.sdk.trace import ReadableSpan, Span, SpanProcessor

from obs.otel.baggage import baggage_attributes
from obs.otel.constants import AttributeName
from obs.otel.run_context import get_run_id


class BaggageSpanProcessor(SpanProcessor):
    """Copy baggage entries from the parent context onto each started span.

    This is how spans opened by nested actions inherit ``cmd.entry`` from
    the top-level command.
    """

    def on_start(self, span: Span, parent_context: Context | None = None) -> None:
        """Attach parent-context baggage as span attributes.

        Parameters
        ----------
        span
            Span being started.
        parent_context
            Context the span was started in.
        """
        for key, value in baggage_attributes(parent_context).items():
            span.set_attribute(key, value)

    def on_end(self, span: ReadableSpan) -> None:
        _ = span

    def shutdown(self) -> None:
        """Shutdown the span processor."""

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Flush any buffered spans.

        Returns
        -------
        bool
            Always True; nothing is buffered.
        """
        _ = timeout_millis
        return True


class RunIdSpanProcessor(SpanProcessor):
    """Attach run_id to every started span when available."""

    def on_start(self, span: Span, parent_context: Context | None = None) -> None:
        _ = parent_context
        run_id = get_run_id()
        if run_id:
            span.set_attribute(AttributeName.RUN_ID, run_id)

    def on_end(self, span: ReadableSpan) -> None:
        _ = span

    def shutdown(self) -> None:
        """Shutdown the span processor."""

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Flush any buffered spans.

        Returns
        -------
        bool
            Always True; nothing is buffered.
        """
        _ = timeout_millis
        return True


__all__ = ["BaggageSpanProcessor", "RunIdSpanProcessor"]
