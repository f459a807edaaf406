"""Process-scoped usage attributes attached to every command span."""

from __future__ import annotations

import threading
from collections.abc import Mapping

from opentelemetry.util.types import AttributeValue


class UsageAttributes:
    """Thread-safe accumulator of usage attributes.

    Subsystems record facts about how the CLI was used (for example which
    tool was invoked); the command interceptor reads a snapshot when it
    closes its span.
    """

    def __init__(self) -> None:
        self._values: dict[str, AttributeValue] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: AttributeValue) -> None:
        """Record or replace a usage attribute."""
        with self._lock:
            self._values[key] = value

    def update(self, values: Mapping[str, AttributeValue]) -> None:
        """Record several usage attributes at once."""
        with self._lock:
            self._values.update(values)

    def snapshot(self) -> dict[str, AttributeValue]:
        """Return a copy of the recorded attributes.

        Returns
        -------
        dict[str, AttributeValue]
            Attributes recorded so far.
        """
        with self._lock:
            return dict(self._values)

    def clear(self) -> None:
        """Drop all recorded attributes."""
        with self._lock:
            self._values.clear()


_PROCESS_USAGE = UsageAttributes()


def process_usage_attributes() -> UsageAttributes:
    """Return the process-wide usage accumulator.

    Returns
    -------
    UsageAttributes
        Shared accumulator instance.
    """
    return _PROCESS_USAGE


def set_usage_attribute(key: str, value: AttributeValue) -> None:
    """Record a usage attribute on the process-wide accumulator."""
    _PROCESS_USAGE.set(key, value)


__all__ = [
    "UsageAttributes",
    "process_usage_attributes",
    "set_usage_attribute",
]
