"""CLI entrypoints for cmdtrace."""

from cli.app import main
from cli.exit_codes import ExitCode
from cli.result import ActionResult

__all__ = ["ActionResult", "ExitCode", "main"]
