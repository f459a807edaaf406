"""Tests for span attribute normalization and usage accumulation."""

from __future__ import annotations

import logging
import threading

import pytest

from obs.otel.attributes import normalize_attributes
from obs.otel.usage import UsageAttributes

_REDACT = frozenset({"token", "password"})


def test_normalize_drops_none_and_redacts() -> None:
    """Drop missing values and mask sensitive keys."""
    normalized = normalize_attributes(
        {"tool.name": "az", "auth.token": "abc", "db.password": "pw", "extra": None},
        count_limit=None,
        value_length_limit=None,
        redact_keys=_REDACT,
    )
    assert normalized == {
        "tool.name": "az",
        "auth.token": "[redacted]",
        "db.password": "[redacted]",
    }


def test_normalize_coerces_collections() -> None:
    """Convert sequences to homogeneous lists and mappings to JSON."""
    normalized = normalize_attributes(
        {"flags": ("force", "output"), "counts": [1, 2.5], "meta": {"b": 1, "a": 2}},
        count_limit=None,
        value_length_limit=None,
        redact_keys=_REDACT,
    )
    assert normalized["flags"] == ["force", "output"]
    assert normalized["counts"] == [1.0, 2.5]
    assert normalized["meta"] == '{"a": 2, "b": 1}'


def test_normalize_applies_limits() -> None:
    """Truncate long strings and keep the lexically first keys."""
    normalized = normalize_attributes(
        {"c": "value", "a": "abcdefgh", "b": 3},
        count_limit=2,
        value_length_limit=4,
        redact_keys=_REDACT,
    )
    assert normalized == {"a": "abcd", "b": 3}


def test_normalize_logs_attributes_dropped_by_count_limit(caplog: pytest.LogCaptureFixture) -> None:
    """Log the names of attributes trimmed by the count limit."""
    with caplog.at_level(logging.DEBUG, logger="obs.otel.attributes"):
        normalized = normalize_attributes(
            {"c": 1, "a": 2, "b": 3},
            count_limit=1,
            value_length_limit=None,
            redact_keys=_REDACT,
        )
    assert normalized == {"a": 2}
    assert "Dropped 2 span attribute(s)" in caplog.text
    assert "['b', 'c']" in caplog.text


def test_normalize_within_count_limit_logs_nothing(caplog: pytest.LogCaptureFixture) -> None:
    """Stay silent when nothing is trimmed."""
    with caplog.at_level(logging.DEBUG, logger="obs.otel.attributes"):
        normalize_attributes({"a": 1}, count_limit=1, redact_keys=_REDACT)
    assert caplog.records == []


def test_usage_snapshot_is_a_copy() -> None:
    """Mutating a snapshot does not affect the accumulator."""
    usage = UsageAttributes()
    usage.set("tool.invoked", "terraform")
    snapshot = usage.snapshot()
    snapshot["tool.invoked"] = "changed"
    assert usage.snapshot() == {"tool.invoked": "terraform"}
    usage.clear()
    assert usage.snapshot() == {}


def test_usage_accepts_concurrent_writers() -> None:
    """Record attributes from several threads without losing writes."""
    usage = UsageAttributes()

    def record(index: int) -> None:
        usage.update({f"k{index}": index})

    threads = [threading.Thread(target=record, args=(index,)) for index in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(usage.snapshot()) == 16
