"""Reduce hosts and executable paths to low-cardinality telemetry labels."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PureWindowsPath

from obs.otel.domains import DOMAINS, Domain

OTHER = "other"


def resolve_service(host: str, domains: Sequence[Domain] = DOMAINS) -> tuple[str, str]:
    """Map a request host to a service name and an anonymized host label.

    The host is matched by suffix against ``domains`` in order. The matching
    suffix is returned as the host label, never the full host, so tenant or
    environment specific subdomains do not reach telemetry.

    Parameters
    ----------
    host
        Raw network host name.
    domains
        Ordered domain table.

    Returns
    -------
    tuple[str, str]
        ``(service, host_label)``, or ``("other", "other")`` when unknown.
    """
    for domain in domains:
        if host.endswith(domain.name):
            return domain.service, domain.name
    return OTHER, OTHER


def tool_name_from_path(cmd: str) -> str:
    """Return the lower-cased executable name for ``cmd`` without extension.

    Parameters
    ----------
    cmd
        Executable path or bare name. Either path separator is accepted.

    Returns
    -------
    str
        Normalized tool name; empty when nothing usable remains.
    """
    name = PureWindowsPath(cmd).name if cmd else ""
    if name.startswith("."):
        # hidden file, drop only the first period
        if len(name) == 1:
            return ""
        name = name[1:]
    name, _, _ = name.partition(".")
    return name.lower()


__all__ = ["OTHER", "resolve_service", "tool_name_from_path"]
