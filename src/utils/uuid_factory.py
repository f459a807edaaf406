"""Time-ordered identifiers for CLI runs."""

from __future__ import annotations

import threading
import uuid
from typing import Final

import uuid6

_UUID_LOCK: Final[threading.Lock] = threading.Lock()


def uuid7() -> uuid.UUID:
    """Return a time-ordered UUIDv7 (thread-safe, monotone).

    Returns
    -------
    uuid.UUID
        Newly generated identifier.
    """
    with _UUID_LOCK:
        return uuid6.uuid7()


def uuid7_str() -> str:
    """Return a UUIDv7 in canonical string form.

    Returns
    -------
    str
        Canonical UUID string.
    """
    return str(uuid7())


__all__ = ["uuid7", "uuid7_str"]
