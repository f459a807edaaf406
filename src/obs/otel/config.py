"""Configuration helpers for telemetry bootstrap."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from obs.otel.scope_metadata import instrumentation_version
from utils.env_utils import (
    env_bool,
    env_bool_strict,
    env_enum,
    env_float,
    env_int,
    env_text,
)

_LOGGER = logging.getLogger(__name__)

_DEFAULT_SERVICE_NAME = "cmdtrace"


class TraceExporterKind(StrEnum):
    """Where finished spans are sent."""

    NONE = "none"
    CONSOLE = "console"
    MEMORY = "memory"


@dataclass(frozen=True)
class TelemetryConfig:
    """Resolved telemetry configuration."""

    enabled: bool
    exporter: TraceExporterKind
    service_name: str
    service_version: str | None
    sampler_ratio: float
    attribute_count_limit: int | None
    attribute_value_length_limit: int | None

    def fingerprint_payload(self) -> Mapping[str, object]:
        """Return a JSON-safe snapshot of the configuration.

        Returns
        -------
        Mapping[str, object]
            Configuration values keyed by field name.
        """
        return {
            "enabled": self.enabled,
            "exporter": str(self.exporter),
            "service_name": self.service_name,
            "service_version": self.service_version,
            "sampler_ratio": self.sampler_ratio,
            "attribute_count_limit": self.attribute_count_limit,
            "attribute_value_length_limit": self.attribute_value_length_limit,
        }


@dataclass(frozen=True)
class TelemetryConfigOverrides:
    """Explicit overrides, typically from CLI flags; ``None`` means unset."""

    enabled: bool | None = None
    exporter: TraceExporterKind | None = None
    service_name: str | None = None


def _resolve_enabled() -> bool:
    if env_bool_strict("OTEL_SDK_DISABLED", default=False):
        return False
    enabled = env_bool("CMDTRACE_COLLECT_TELEMETRY", default=True)
    return True if enabled is None else enabled


def _resolve_sampler_ratio() -> float:
    ratio = env_float("OTEL_TRACES_SAMPLER_ARG", default=1.0)
    if 0.0 <= ratio <= 1.0:
        return ratio
    _LOGGER.warning("OTEL_TRACES_SAMPLER_ARG must be within [0, 1]; got %s.", ratio)
    return 1.0


def resolve_telemetry_config(
    overrides: TelemetryConfigOverrides | None = None,
) -> TelemetryConfig:
    """Resolve telemetry configuration from the environment and overrides.

    Parameters
    ----------
    overrides
        Values that take precedence over the environment.

    Returns
    -------
    TelemetryConfig
        Resolved configuration.
    """
    overrides = overrides or TelemetryConfigOverrides()
    enabled = overrides.enabled if overrides.enabled is not None else _resolve_enabled()
    exporter = overrides.exporter or env_enum(
        "CMDTRACE_TRACES_EXPORTER",
        TraceExporterKind,
        default=TraceExporterKind.NONE,
    )
    service_name = overrides.service_name or env_text(
        "OTEL_SERVICE_NAME",
        default=_DEFAULT_SERVICE_NAME,
    )
    return TelemetryConfig(
        enabled=enabled,
        exporter=exporter,
        service_name=service_name or _DEFAULT_SERVICE_NAME,
        service_version=instrumentation_version(),
        sampler_ratio=_resolve_sampler_ratio(),
        attribute_count_limit=env_int("OTEL_ATTRIBUTE_COUNT_LIMIT"),
        attribute_value_length_limit=env_int("OTEL_ATTRIBUTE_VALUE_LENGTH_LIMIT"),
    )


__all__ = [
    "TelemetryConfig",
    "TelemetryConfigOverrides",
    "TraceExporterKind",
    "resolve_telemetry_config",
]
