"""External tool execution failures."""

from __future__ import annotations


class ToolExitError(Exception):
    """An external executable exited with a non-zero status.

    Parameters
    ----------
    cmd
        Path or name of the executable that was run.
    exit_code
        Process exit status.
    stdout
        Captured standard output, when available.
    stderr
        Captured standard error, when available.
    """

    def __init__(
        self,
        cmd: str,
        exit_code: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ) -> None:
        self.cmd = cmd
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        msg = f"exit code: {exit_code}"
        if stderr:
            msg = f"{msg}, stderr: {stderr.strip()}"
        super().__init__(msg)


__all__ = ["ToolExitError"]
