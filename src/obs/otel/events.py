"""Span naming for CLI commands."""

from __future__ import annotations

COMMAND_EVENT_PREFIX = "cmd."
ROOT_COMMAND = "cmdtrace"


def command_event_name(command_path: str, *, root: str = ROOT_COMMAND) -> str:
    """Return the span name for a command path.

    ``"cmdtrace telemetry show"`` becomes ``"cmd.telemetry.show"``. Command
    paths are assembled from registered command names only, so the result is
    safe to emit.

    Parameters
    ----------
    command_path
        Space separated command path, optionally starting with ``root``.
    root
        Program name trimmed from the front of the path.

    Returns
    -------
    str
        Dotted event name.
    """
    parts = command_path.split()
    if parts and parts[0] == root:
        parts = parts[1:]
    if not parts:
        return COMMAND_EVENT_PREFIX.rstrip(".")
    return COMMAND_EVENT_PREFIX + ".".join(parts)


__all__ = ["COMMAND_EVENT_PREFIX", "ROOT_COMMAND", "command_event_name"]
