"""Result action handler for Cyclopts integration."""

from __future__ import annotations

from typing import Any

from rich.console import Console

from cli.exit_codes import ExitCode
from cli.result import ActionResult


def render_result(result: object, *, console: Console | None = None) -> int:
    """Print a command result and convert it to an exit code.

    Parameters
    ----------
    result
        Value returned by a command or the middleware chain.
    console
        Console to print to; a new stdout console by default.

    Returns
    -------
    int
        Exit code for the process.
    """
    if result is None:
        return ExitCode.SUCCESS
    if isinstance(result, bool):
        return ExitCode.SUCCESS if result else ExitCode.GENERAL_ERROR
    if isinstance(result, int):
        return result
    console = console or Console()
    if isinstance(result, ActionResult):
        if result.summary:
            console.print(result.summary)
        duration = result.metrics.get("duration_ms")
        if duration is not None:
            console.print(f"Duration: {duration:.1f}ms")
        return int(result.exit_code)
    console.print(f"Unexpected command return type: {type(result).__name__}")
    return ExitCode.GENERAL_ERROR


def cli_result_action(result: Any) -> int:
    """Handle command results registered as the app ``result_action``.

    Returns
    -------
    int
        Exit code for the process.
    """
    return render_result(result)


__all__ = ["cli_result_action", "render_result"]
