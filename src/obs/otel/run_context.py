"""Run-scoped context helpers for OpenTelemetry."""

from __future__ import annotations

from contextvars import ContextVar, Token

_RUN_ID: ContextVar[str | None] = ContextVar("cmdtrace.run_id", default=None)
_LAST_TRACE_ID: ContextVar[str | None] = ContextVar("cmdtrace.last_trace_id", default=None)


def get_run_id() -> str | None:
    """Return the current run_id, if set.

    Returns
    -------
    str | None
        Current run identifier or None.
    """
    return _RUN_ID.get()


def set_run_id(run_id: str) -> Token[str | None]:
    """Set the run_id and return the context token.

    Parameters
    ----------
    run_id
        Run identifier to set.

    Returns
    -------
    contextvars.Token[str | None]
        Token used to restore the previous value.
    """
    return _RUN_ID.set(run_id)


def reset_run_id(token: Token[str | None]) -> None:
    """Reset the run_id to the previous value using the token."""
    _RUN_ID.reset(token)


def get_last_trace_id() -> str | None:
    """Return the trace id of the most recent command span in this context.

    Returns
    -------
    str | None
        Hex trace id, or None when no command has run.
    """
    return _LAST_TRACE_ID.get()


def set_last_trace_id(trace_id: str) -> None:
    """Record the trace id of the command span being run."""
    _LAST_TRACE_ID.set(trace_id)


def clear_last_trace_id() -> None:
    """Forget the recorded trace id."""
    _LAST_TRACE_ID.set(None)


__all__ = [
    "clear_last_trace_id",
    "get_last_trace_id",
    "get_run_id",
    "reset_run_id",
    "set_last_trace_id",
    "set_run_id",
]
