"""Service response errors raised by HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpRequest:
    """Request metadata retained on a failed service response."""

    method: str
    host: str


@dataclass(frozen=True)
class HttpResponse:
    """Raw response metadata retained on a failed service call."""

    status_code: int
    request: HttpRequest | None = None


class ServiceResponseError(Exception):
    """A remote service answered with an error status.

    Parameters
    ----------
    error_code
        Service-specific error code (for example ``ResourceNotFound``).
    raw_response
        Underlying response, when one was received.
    """

    def __init__(self, error_code: str, raw_response: HttpResponse | None = None) -> None:
        self.error_code = error_code
        self.raw_response = raw_response
        status = raw_response.status_code if raw_response is not None else None
        msg = f"service request failed: {error_code}"
        if status is not None:
            msg = f"{msg} (status {status})"
        super().__init__(msg)

    @property
    def status_code(self) -> int | None:
        """Return the HTTP status code, when a response exists."""
        if self.raw_response is None:
            return None
        return self.raw_response.status_code


__all__ = ["HttpRequest", "HttpResponse", "ServiceResponseError"]
