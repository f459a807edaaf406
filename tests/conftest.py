"""Shared pytest fixtures for cmdtrace tests."""

from __future__ import annotations

import pytest

from obs.otel.run_context import clear_last_trace_id
from obs.otel.usage import UsageAttributes
from tests.obs._support.otel_harness import OtelHarness, get_otel_harness


@pytest.fixture
def otel_harness() -> OtelHarness:
    """Provide the in-memory tracing harness with no recorded spans.

    Returns
    -------
    OtelHarness
        Harness with an empty exporter.
    """
    harness = get_otel_harness()
    harness.reset()
    clear_last_trace_id()
    return harness


@pytest.fixture
def usage() -> UsageAttributes:
    """Provide an isolated usage-attribute accumulator.

    Returns
    -------
    UsageAttributes
        Empty accumulator.
    """
    return UsageAttributes()
