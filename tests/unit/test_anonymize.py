"""Tests for host and executable anonymization."""

from __future__ import annotations

import pytest

from obs.otel.anonymize import OTHER, resolve_service, tool_name_from_path
from obs.otel.domains import DOMAINS, Domain


def test_resolve_service_returns_suffix_not_host() -> None:
    """Return the matched suffix as the host label."""
    table = (Domain("azure.com", "arm"),)
    assert resolve_service("management.azure.com", table) == ("arm", "azure.com")


def test_resolve_service_unknown_host() -> None:
    """Collapse unmatched hosts into ``other``."""
    assert resolve_service("foo.unknown.example", (Domain("azure.com", "arm"),)) == (
        OTHER,
        OTHER,
    )


def test_resolve_service_first_match_wins() -> None:
    """Use table order when suffixes overlap."""
    table = (Domain("dev.azure.com", "azdo"), Domain("azure.com", "arm"))
    assert resolve_service("myorg.dev.azure.com", table) == ("azdo", "dev.azure.com")
    assert resolve_service("myorg.dev.azure.com", tuple(reversed(table))) == (
        "arm",
        "azure.com",
    )


def test_default_table_maps_known_hosts() -> None:
    """Resolve well-known hosts with the built-in table."""
    assert resolve_service("management.azure.com", DOMAINS) == ("arm", "management.azure.com")
    assert resolve_service("api.github.com") == ("github", "api.github.com")


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/usr/bin/terraform.exe", "terraform"),
        ("C:\\Program Files\\Git\\bin\\Git.EXE", "git"),
        ("kubectl", "kubectl"),
        (".hidden", "hidden"),
        (".hidden.sh", "hidden"),
        ("archive.tar.gz", "archive"),
        (".", ""),
        ("", ""),
    ],
)
def test_tool_name_from_path(path: str, expected: str) -> None:
    """Normalize executable paths into bare lower-case names."""
    assert tool_name_from_path(path) == expected
