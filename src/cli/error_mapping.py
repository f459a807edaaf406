"""Classify command failures into a privacy-safe telemetry taxonomy.

Classification inspects the *shape* of an exception (its type and the
structured fields it carries) and never its message, so argument values and
secrets that end up in messages do not reach telemetry.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias, TypeVar

import msgspec
from opentelemetry.trace import Span, Status, StatusCode
from opentelemetry.util.types import AttributeValue

from errors.auth import AuthFailedError
from errors.deployment import DeploymentError, DeploymentErrorLine
from errors.service import ServiceResponseError
from errors.tool import ToolExitError
from obs.otel.anonymize import OTHER, resolve_service, tool_name_from_path
from obs.otel.constants import AttributeName, error_key
from obs.otel.domains import DOMAINS, Domain
from obs.otel.tracing import set_span_attributes

_LOGGER = logging.getLogger(__name__)

UNKNOWN_ERROR_CODE = "UnknownError"
DEPLOYMENT_FAILED_CODE = "service.arm.deployment.failed"
AUTH_FAILED_CODE = "service.aad.failed"

ErrorDetail: TypeAlias = tuple[AttributeName, AttributeValue]


class ErrorCategory(StrEnum):
    """Known failure categories, in classification priority order."""

    SERVICE = "ServiceError"
    DEPLOYMENT = "DeploymentError"
    TOOL = "ToolExecutionError"
    AUTH = "AuthError"
    UNKNOWN = "UnknownError"


@dataclass(frozen=True)
class ClassifiedError:
    """Telemetry view of a failure.

    Parameters
    ----------
    category
        Failure category.
    code
        Category code used as the span status description, such as
        ``service.arm.404`` or ``tool.terraform.failed``.
    details
        Ordered detail attributes keyed by raw vocabulary names.
    """

    category: ErrorCategory
    code: str
    details: tuple[ErrorDetail, ...] = ()

    def namespaced(self) -> dict[str, AttributeValue]:
        """Return details keyed by their canonical ``error.``-prefixed names.

        Returns
        -------
        dict[str, AttributeValue]
            Span-ready attributes.
        """
        return {error_key(key): value for key, value in self.details}

    def detail(self, key: AttributeName) -> AttributeValue | None:
        """Return the first detail recorded under ``key``, if any.

        Returns
        -------
        AttributeValue | None
            Detail value or None.
        """
        for name, value in self.details:
            if name == key:
                return value
        return None


class DeploymentErrorCode(msgspec.Struct, frozen=True):
    """Failure codes found at one depth of a deployment error chain."""

    code: str = msgspec.field(name="error.code")
    frame: int = msgspec.field(name="error.frame")


_CODES_ENCODER = msgspec.json.Encoder()


E = TypeVar("E", bound=BaseException)


def find_error(exc: BaseException, error_type: type[E]) -> E | None:
    """Return the first exception of ``error_type`` linked to ``exc``.

    The search is depth first over ``exc`` itself, exception group members,
    and the explicit cause (or implicit context, unless suppressed).

    Parameters
    ----------
    exc
        Exception to search from.
    error_type
        Type to look for.

    Returns
    -------
    E | None
        Matching exception, or None.
    """
    pending: list[BaseException] = [exc]
    seen: set[int] = set()
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if isinstance(current, error_type):
            return current
        linked: list[BaseException] = []
        if isinstance(current, BaseExceptionGroup):
            linked.extend(current.exceptions)
        cause = current.__cause__
        if cause is None and not current.__suppress_context__:
            cause = current.__context__
        if cause is not None:
            linked.append(cause)
        pending.extend(reversed(linked))
    return None


def classify_error(exc: BaseException, *, domains: Sequence[Domain] = DOMAINS) -> ClassifiedError:
    """Classify ``exc`` into a telemetry category.

    The first matching shape wins, checked in :class:`ErrorCategory` order;
    an exception chain may carry several known shapes.

    Parameters
    ----------
    exc
        Failure raised by a command.
    domains
        Domain table used to anonymize service hosts.

    Returns
    -------
    ClassifiedError
        Category code and detail attributes.
    """
    service_err = find_error(exc, ServiceResponseError)
    if service_err is not None:
        return _classify_service_error(service_err, domains)
    deployment_err = find_error(exc, DeploymentError)
    if deployment_err is not None:
        return _classify_deployment_error(deployment_err)
    tool_err = find_error(exc, ToolExitError)
    if tool_err is not None:
        return _classify_tool_error(tool_err)
    auth_err = find_error(exc, AuthFailedError)
    if auth_err is not None:
        return _classify_auth_error(auth_err)
    return ClassifiedError(ErrorCategory.UNKNOWN, UNKNOWN_ERROR_CODE)


def map_error(
    exc: BaseException,
    span: Span,
    *,
    domains: Sequence[Domain] = DOMAINS,
) -> ClassifiedError:
    """Classify ``exc`` and record the outcome on ``span``.

    Sets the span status to error with the category code as description and
    attaches the namespaced detail attributes. ``exc`` is left untouched.

    Returns
    -------
    ClassifiedError
        The classification applied to the span.
    """
    classified = classify_error(exc, domains=domains)
    if classified.details:
        set_span_attributes(span, classified.namespaced())
    span.set_status(Status(StatusCode.ERROR, classified.code))
    return classified


def _classify_service_error(
    err: ServiceResponseError,
    domains: Sequence[Domain],
) -> ClassifiedError:
    service_name = OTHER
    status_code = -1
    details: list[ErrorDetail] = [(AttributeName.SERVICE_ERROR_CODE, err.error_code)]
    response = err.raw_response
    if response is not None:
        status_code = response.status_code
        details.append((AttributeName.SERVICE_STATUS_CODE, status_code))
        request = response.request
        if request is not None:
            service_name, host_label = resolve_service(request.host, domains)
            details.extend(
                (
                    (AttributeName.SERVICE_HOST, host_label),
                    (AttributeName.SERVICE_METHOD, request.method),
                    (AttributeName.SERVICE_NAME, service_name),
                )
            )
    return ClassifiedError(
        ErrorCategory.SERVICE,
        f"service.{service_name}.{status_code}",
        tuple(details),
    )


def _classify_deployment_error(err: DeploymentError) -> ClassifiedError:
    details: list[ErrorDetail] = [(AttributeName.SERVICE_NAME, "arm")]
    codes = collect_deployment_codes(err.details)
    if codes:
        encoded = encode_deployment_codes(codes)
        if encoded is not None:
            details.append((AttributeName.SERVICE_ERROR_CODE, encoded))
    return ClassifiedError(ErrorCategory.DEPLOYMENT, DEPLOYMENT_FAILED_CODE, tuple(details))


def _classify_tool_error(err: ToolExitError) -> ClassifiedError:
    tool_name = tool_name_from_path(err.cmd) or OTHER
    return ClassifiedError(
        ErrorCategory.TOOL,
        f"tool.{tool_name}.failed",
        (
            (AttributeName.TOOL_EXIT_CODE, err.exit_code),
            (AttributeName.TOOL_NAME, tool_name),
        ),
    )


def _classify_auth_error(err: AuthFailedError) -> ClassifiedError:
    details: list[ErrorDetail] = [(AttributeName.SERVICE_NAME, "aad")]
    parsed = err.parsed
    if parsed is not None:
        details.extend(
            (
                (AttributeName.SERVICE_STATUS_CODE, parsed.error),
                (AttributeName.SERVICE_ERROR_CODE, ",".join(str(c) for c in parsed.error_codes)),
                (AttributeName.SERVICE_CORRELATION_ID, parsed.correlation_id),
            )
        )
    return ClassifiedError(ErrorCategory.AUTH, AUTH_FAILED_CODE, tuple(details))


def collect_deployment_codes(root: DeploymentErrorLine | None) -> list[DeploymentErrorCode]:
    """Flatten a deployment error chain into per-depth failure codes.

    Sibling codes at one level are joined with commas. The depth only
    advances past levels that produced a code, so empty intermediate frames
    do not consume a depth.

    Parameters
    ----------
    root
        Root frame of the chain.

    Returns
    -------
    list[DeploymentErrorCode]
        Codes in depth-first order.
    """
    codes: list[DeploymentErrorCode] = []

    def collect(lines: Sequence[DeploymentErrorLine | None], frame: int) -> None:
        joined = ",".join(line.code for line in lines if line is not None and line.code)
        if joined:
            codes.append(DeploymentErrorCode(code=joined, frame=frame))
            frame += 1
        for line in lines:
            if line is not None and line.inner:
                collect(line.inner, frame)

    collect((root,), 0)
    return codes


def encode_deployment_codes(codes: Sequence[DeploymentErrorCode]) -> str | None:
    """Encode deployment codes as a compact JSON array.

    Returns
    -------
    str | None
        JSON text, or None when encoding failed.
    """
    try:
        return _CODES_ENCODER.encode(list(codes)).decode("utf-8")
    except (msgspec.EncodeError, TypeError, UnicodeDecodeError) as exc:
        _LOGGER.warning("telemetry: failed to encode deployment error codes: %s", exc)
        return None


__all__ = [
    "AUTH_FAILED_CODE",
    "DEPLOYMENT_FAILED_CODE",
    "UNKNOWN_ERROR_CODE",
    "ClassifiedError",
    "DeploymentErrorCode",
    "ErrorCategory",
    "classify_error",
    "collect_deployment_codes",
    "encode_deployment_codes",
    "find_error",
    "map_error",
]
