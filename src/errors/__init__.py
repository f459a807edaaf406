"""Error shapes raised by cmdtrace subsystems and inspected by telemetry."""

from errors.auth import AadErrorResponse, AuthFailedError
from errors.deployment import DeploymentError, DeploymentErrorLine
from errors.service import HttpRequest, HttpResponse, ServiceResponseError
from errors.tool import ToolExitError

__all__ = [
    "AadErrorResponse",
    "AuthFailedError",
    "DeploymentError",
    "DeploymentErrorLine",
    "HttpRequest",
    "HttpResponse",
    "ServiceResponseError",
    "ToolExitError",
]
