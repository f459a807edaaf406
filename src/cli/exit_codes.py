"""Exit code taxonomy for the cmdtrace CLI."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Exit codes follow Unix conventions with domain-specific extensions:
    - 0: Success
    - 1-9: General errors (parse, validation, config)
    - 20-29: Failures reported by services, deployments, tools, and auth
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    SERVICE_ERROR = 20
    DEPLOYMENT_ERROR = 21
    TOOL_ERROR = 22
    AUTH_ERROR = 23

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Parameters
        ----------
        exc
            Exception to classify.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        cyclopts_code = _exit_code_for_cyclopts(exc)
        if cyclopts_code is not None:
            return cyclopts_code
        domain_code = _exit_code_for_domain_error(exc)
        if domain_code is not None:
            return domain_code
        if isinstance(exc, (ValueError, TypeError)):
            return cls.VALIDATION_ERROR
        return cls.GENERAL_ERROR


def _exit_code_for_cyclopts(exc: BaseException) -> ExitCode | None:
    if not exc.__class__.__module__.startswith("cyclopts"):
        return None
    if exc.__class__.__name__ == "ValidationError":
        return ExitCode.VALIDATION_ERROR
    return ExitCode.PARSE_ERROR


def _exit_code_for_domain_error(exc: BaseException) -> ExitCode | None:
    from cli.error_mapping import find_error
    from errors import AuthFailedError, DeploymentError, ServiceResponseError, ToolExitError

    mappings: tuple[tuple[type[BaseException], ExitCode], ...] = (
        (ServiceResponseError, ExitCode.SERVICE_ERROR),
        (DeploymentError, ExitCode.DEPLOYMENT_ERROR),
        (ToolExitError, ExitCode.TOOL_ERROR),
        (AuthFailedError, ExitCode.AUTH_ERROR),
    )
    for error_type, exit_code in mappings:
        if find_error(exc, error_type) is not None:
            return exit_code
    return None


__all__ = ["ExitCode"]
