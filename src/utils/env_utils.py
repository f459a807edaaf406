"""Environment variable resolution helpers for cmdtrace settings."""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import TypeVar

_LOGGER = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Parameters
    ----------
    name
        Environment variable name.

    Returns
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped if stripped else None


def env_text(name: str, *, default: str | None = None) -> str | None:
    """Return an environment variable string, falling back to ``default``.

    Returns
    -------
    str | None
        Parsed value, or default when missing or blank.
    """
    value = env_value(name)
    return default if value is None else value


def env_list(
    name: str,
    *,
    default: list[str] | None = None,
    separator: str = ",",
) -> list[str]:
    """Parse environment variable as a list of non-empty strings.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Value returned when the variable is unset.
    separator
        Item separator.

    Returns
    -------
    list[str]
        Parsed list or default.
    """
    raw = env_value(name)
    if raw is None:
        return list(default or [])
    return [item.strip() for item in raw.split(separator) if item.strip()]


def env_bool(name: str, *, default: bool | None = None) -> bool | None:
    """Parse a permissive boolean (``yes``/``no``, ``1``/``0``, ...).

    Invalid values are logged and resolve to ``default``.

    Returns
    -------
    bool | None
        Parsed boolean or default.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    _LOGGER.warning("Invalid boolean for %s: %r", name, raw)
    return default


def env_bool_strict(name: str, *, default: bool) -> bool:
    """Parse environment variable as strict boolean ('true'/'false' only).

    Returns
    -------
    bool
        Parsed boolean or default.
    """
    value = env_value(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    _LOGGER.warning("Invalid boolean for %s: %r", name, value)
    return default


def env_float(name: str, *, default: float) -> float:
    """Parse environment variable as float with error logging.

    Returns
    -------
    float
        Parsed float or default.
    """
    raw = env_value(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        _LOGGER.warning("Invalid float for %s: %r", name, raw)
        return default


def env_int(name: str) -> int | None:
    """Parse environment variable as integer, logging invalid values.

    Returns
    -------
    int | None
        Parsed integer or None.
    """
    raw = env_value(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        _LOGGER.warning("Invalid integer for %s: %r", name, raw)
        return None


TEnum = TypeVar("TEnum", bound=Enum)


def env_enum(name: str, enum_type: type[TEnum], *, default: TEnum) -> TEnum:
    """Parse environment variable as an enum member, matching value or name.

    Returns
    -------
    TEnum
        Parsed enum member or default.
    """
    raw = env_value(name)
    if raw is None:
        return default
    lowered = raw.lower()
    for member in enum_type:
        if member.name.lower() == lowered:
            return member
        if isinstance(member.value, str) and member.value.lower() == lowered:
            return member
    _LOGGER.warning("Invalid value for %s: %r", name, raw)
    return default


__all__ = [
    "env_bool",
    "env_bool_strict",
    "env_enum",
    "env_float",
    "env_int",
    "env_list",
    "env_text",
    "env_value",
]
