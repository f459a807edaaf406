"""Canonical OpenTelemetry constants for cmdtrace."""

from __future__ import annotations

from enum import StrEnum

ERROR_KEY_PREFIX = "error."


class AttributeName(StrEnum):
    """Canonical attribute names.

    Error detail keys are always emitted through :func:`error_key`, so only
    members of this vocabulary ever become telemetry keys.
    """

    RUN_ID = "cmdtrace.run_id"

    CMD_ENTRY = "cmd.entry"
    CMD_FLAGS = "cmd.flags"
    CMD_ARGS_COUNT = "cmd.args.count"

    SERVICE_NAME = "service.name"
    SERVICE_HOST = "service.host"
    SERVICE_METHOD = "service.method"
    SERVICE_ERROR_CODE = "service.error.code"
    SERVICE_STATUS_CODE = "service.status.code"
    SERVICE_CORRELATION_ID = "service.correlation.id"

    TOOL_NAME = "tool.name"
    TOOL_EXIT_CODE = "tool.exit.code"
    TOOL_INVOKED = "tool.invoked"


class ScopeName(StrEnum):
    """Canonical instrumentation scope names."""

    ROOT = "cmdtrace"
    CLI = "cmdtrace.cli"
    OBS = "cmdtrace.obs"


class ResourceAttribute(StrEnum):
    """Canonical resource attribute names."""

    SERVICE_NAME = "service.name"
    SERVICE_VERSION = "service.version"
    SERVICE_INSTANCE_ID = "service.instance.id"


def error_key(key: str) -> str:
    """Return the canonical error-detail attribute key for ``key``.

    Parameters
    ----------
    key
        Raw vocabulary key, such as ``service.name``.

    Returns
    -------
    str
        Key namespaced under ``error.``.
    """
    return f"{ERROR_KEY_PREFIX}{key}"


__all__ = [
    "ERROR_KEY_PREFIX",
    "AttributeName",
    "ResourceAttribute",
    "ScopeName",
    "error_key",
]
