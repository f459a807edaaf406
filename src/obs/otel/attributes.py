"""Normalize OpenTelemetry attributes for cmdtrace telemetry."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import cast

from opentelemetry.util.types import AttributeValue

from utils.env_utils import env_int, env_list

_LOGGER = logging.getLogger(__name__)

_DEFAULT_REDACT_KEYS = [
    "authorization",
    "cookie",
    "password",
    "secret",
    "token",
    "api_key",
]


def _redact_keys() -> frozenset[str]:
    keys = env_list("CMDTRACE_OTEL_REDACT_KEYS", default=_DEFAULT_REDACT_KEYS)
    return frozenset(key.lower() for key in keys)


_MAX_ATTRIBUTES = env_int("OTEL_ATTRIBUTE_COUNT_LIMIT")
_MAX_ATTRIBUTE_LENGTH = env_int("OTEL_ATTRIBUTE_VALUE_LENGTH_LIMIT")
_REDACT_KEYS = _redact_keys()


def _should_redact(key: str, redact_keys: frozenset[str]) -> bool:
    lowered = key.lower()
    return any(part in lowered for part in redact_keys)


def _is_scalar(value: object) -> bool:
    return isinstance(value, (str, bool, int, float))


def _truncate_str(value: str, *, value_length_limit: int | None) -> str:
    if value_length_limit is None:
        return value
    if value_length_limit <= 0:
        return ""
    return value[:value_length_limit]


def _normalize_sequence(
    values: Sequence[object], *, value_length_limit: int | None
) -> AttributeValue:
    items = [item for item in values if item is not None]
    if not items:
        return []
    if all(isinstance(item, bool) for item in items):
        return [bool(item) for item in items]
    if all(isinstance(item, int) and not isinstance(item, bool) for item in items):
        return [cast("int", item) for item in items]
    if all(isinstance(item, (int, float)) and not isinstance(item, bool) for item in items):
        return [float(cast("int | float", item)) for item in items]
    return [_truncate_str(str(item), value_length_limit=value_length_limit) for item in items]


def _normalize_value(value: object, *, value_length_limit: int | None) -> AttributeValue:
    if _is_scalar(value):
        if isinstance(value, str):
            return _truncate_str(value, value_length_limit=value_length_limit)
        return cast("AttributeValue", value)
    if isinstance(value, Mapping):
        return _truncate_str(
            json.dumps(value, sort_keys=True, default=str),
            value_length_limit=value_length_limit,
        )
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return _normalize_sequence(list(value), value_length_limit=value_length_limit)
    return _truncate_str(str(value), value_length_limit=value_length_limit)


def normalize_attributes(
    attrs: Mapping[str, object] | None,
    *,
    count_limit: int | None = _MAX_ATTRIBUTES,
    value_length_limit: int | None = _MAX_ATTRIBUTE_LENGTH,
    redact_keys: frozenset[str] = _REDACT_KEYS,
) -> dict[str, AttributeValue]:
    """Normalize raw attribute values into OpenTelemetry-safe types.

    ``None`` values are dropped, values under sensitive-looking keys are
    replaced with ``[redacted]`` and, when a count limit applies, the
    lexically first keys are kept.

    Parameters
    ----------
    attrs
        Raw attribute mapping.
    count_limit
        Maximum number of attributes to retain, or ``None`` for no limit.
    value_length_limit
        Maximum string length to retain, or ``None`` for no limit.
    redact_keys
        Lower-case key fragments whose values are masked.

    Returns
    -------
    dict[str, AttributeValue]
        Normalized attribute mapping.
    """
    if not attrs:
        return {}
    normalized: dict[str, AttributeValue] = {}
    for key, value in attrs.items():
        if value is None:
            continue
        key_str = str(key)
        if _should_redact(key_str, redact_keys):
            normalized[key_str] = _truncate_str("[redacted]", value_length_limit=value_length_limit)
            continue
        normalized[key_str] = _normalize_value(value, value_length_limit=value_length_limit)
    if count_limit is None or len(normalized) <= count_limit:
        return normalized
    ordered = sorted(normalized)
    kept, dropped = ordered[: max(count_limit, 0)], ordered[max(count_limit, 0) :]
    _LOGGER.debug(
        "Dropped %d span attribute(s) over the count limit of %d: %s",
        len(dropped),
        count_limit,
        dropped,
    )
    return {key: normalized[key] for key in kept}


__all__ = ["normalize_attributes"]
