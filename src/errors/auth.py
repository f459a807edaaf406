"""Authentication failures returned by the identity provider."""

from __future__ import annotations

import logging

import msgspec

_LOGGER = logging.getLogger(__name__)


class AadErrorResponse(msgspec.Struct, frozen=True, kw_only=True):
    """Parsed identity-provider error payload."""

    error: str = ""
    error_description: str = ""
    error_codes: tuple[int, ...] = ()
    timestamp: str = ""
    trace_id: str = ""
    correlation_id: str = ""


_RESPONSE_DECODER = msgspec.json.Decoder(AadErrorResponse)


class AuthFailedError(Exception):
    """Token acquisition failed.

    Parameters
    ----------
    parsed
        Structured error payload, when the response body could be parsed.
    """

    def __init__(
        self,
        parsed: AadErrorResponse | None = None,
        msg: str = "failed to authenticate",
    ) -> None:
        self.parsed = parsed
        if parsed is not None and parsed.error:
            msg = f"{msg}: {parsed.error}"
        super().__init__(msg)

    @classmethod
    def from_response_body(cls, body: bytes | str) -> AuthFailedError:
        """Build an error from a raw identity-provider response body.

        Parameters
        ----------
        body
            JSON response body.

        Returns
        -------
        AuthFailedError
            Error carrying the parsed payload, or no payload when the body is
            not a recognizable error document.
        """
        try:
            parsed = _RESPONSE_DECODER.decode(body)
        except msgspec.DecodeError:
            _LOGGER.debug("auth: response body is not a parseable error payload")
            parsed = None
        return cls(parsed)


__all__ = ["AadErrorResponse", "AuthFailedError"]
