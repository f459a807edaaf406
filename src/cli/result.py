"""Result contract for CLI actions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class ActionResult:
    """Structured result from running a CLI action.

    Parameters
    ----------
    exit_code
        Integer exit code for the command.
    summary
        Optional human-readable summary of the result.
    metrics
        Mapping of metric names to numeric values.
    trace_id
        Trace id of the command span, for support correlation.
    """

    exit_code: int = ExitCode.SUCCESS
    summary: str | None = None
    metrics: Mapping[str, float] = field(default_factory=dict)
    trace_id: str | None = None

    @classmethod
    def success(
        cls,
        *,
        summary: str | None = None,
        metrics: Mapping[str, float] | None = None,
    ) -> ActionResult:
        """Create a successful result.

        Returns
        -------
        ActionResult
            Success result with exit code 0.
        """
        return cls(exit_code=ExitCode.SUCCESS, summary=summary, metrics=metrics or {})

    @classmethod
    def error(cls, exit_code: ExitCode | int, *, summary: str | None = None) -> ActionResult:
        """Create an error result.

        Returns
        -------
        ActionResult
            Error result with the specified exit code.
        """
        return cls(exit_code=int(exit_code), summary=summary)

    def with_trace_id(self, trace_id: str) -> ActionResult:
        """Return a copy stamped with ``trace_id``.

        Returns
        -------
        ActionResult
            Result carrying the trace id.
        """
        return replace(self, trace_id=trace_id)

    @property
    def ok(self) -> bool:
        """Check if the result indicates success.

        Returns
        -------
        bool
            True if exit_code is 0.
        """
        return self.exit_code == ExitCode.SUCCESS


__all__ = ["ActionResult"]
