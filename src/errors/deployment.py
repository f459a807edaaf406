"""Infrastructure deployment failures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeploymentErrorLine:
    """One frame of a nested deployment failure.

    Parameters
    ----------
    code
        Failure code reported for this frame; may be empty.
    message
        Human-readable failure message.
    inner
        Nested frames that caused this one.
    """

    code: str = ""
    message: str = ""
    inner: tuple[DeploymentErrorLine | None, ...] = ()


class DeploymentError(Exception):
    """A deployment operation failed with a chain of nested errors."""

    def __init__(
        self,
        details: DeploymentErrorLine | None,
        title: str = "deployment failed",
    ) -> None:
        self.details = details
        self.title = title
        super().__init__(title)


__all__ = ["DeploymentError", "DeploymentErrorLine"]
