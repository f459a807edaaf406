"""Baggage helpers for propagating command identity to descendant spans."""

from __future__ import annotations

from collections.abc import Mapping

from opentelemetry import baggage
from opentelemetry import context as otel_context
from opentelemetry.context import Context


def set_baggage_in_context(ctx: Context | None, entries: Mapping[str, object]) -> Context:
    """Return ``ctx`` with ``entries`` added as baggage.

    Parameters
    ----------
    ctx
        Context to extend; the current context when ``None``.
    entries
        Baggage entries. Values are stored as strings.

    Returns
    -------
    opentelemetry.context.Context
        New context carrying the entries.
    """
    updated = ctx if ctx is not None else otel_context.get_current()
    for key, value in entries.items():
        updated = baggage.set_baggage(str(key), str(value), context=updated)
    return updated


def baggage_attributes(ctx: Context | None = None) -> dict[str, str]:
    """Return baggage entries from ``ctx`` as span-ready attributes.

    Returns
    -------
    dict[str, str]
        Baggage entries keyed by name.
    """
    return {key: str(value) for key, value in baggage.get_all(context=ctx).items()}


__all__ = ["baggage_attributes", "set_baggage_in_context"]
