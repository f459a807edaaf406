"""Run external tools under command telemetry."""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.result import ActionResult
from errors import ToolExitError
from obs.otel.anonymize import tool_name_from_path
from obs.otel.constants import AttributeName
from obs.otel.usage import set_usage_attribute

_LOGGER = logging.getLogger(__name__)

_COMMAND_NOT_FOUND = 127


def exec_command(
    tool: Annotated[str, Parameter(help="Executable name or path.")],
    /,
    *args: Annotated[str, Parameter(allow_leading_hyphen=True)],
    cwd: Annotated[
        Path | None,
        Parameter(name="--cwd", help="Working directory for the tool."),
    ] = None,
) -> ActionResult:
    """Run an external tool and fail when it exits non-zero.

    Tool output is passed through unchanged. Only the normalized tool name
    and exit code are recorded in telemetry.

    Returns:
    -------
    ActionResult
        Success result with the run duration.

    Raises:
        ToolExitError: If the tool cannot be started or exits non-zero.
    """
    set_usage_attribute(AttributeName.TOOL_INVOKED, tool_name_from_path(tool) or "other")
    executable = shutil.which(tool) or tool
    _LOGGER.debug("Running external tool with %d argument(s).", len(args))
    started = time.perf_counter()
    try:
        completed = subprocess.run([executable, *args], cwd=cwd, check=False)
    except FileNotFoundError as exc:
        raise ToolExitError(tool, _COMMAND_NOT_FOUND) from exc
    duration_ms = (time.perf_counter() - started) * 1000.0
    if completed.returncode != 0:
        raise ToolExitError(tool, completed.returncode)
    return ActionResult.success(metrics={"duration_ms": duration_ms})


__all__ = ["exec_command"]
