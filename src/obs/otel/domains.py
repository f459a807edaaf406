"""Well-known service domains used to anonymize request hosts."""

from __future__ import annotations

from typing import NamedTuple


class Domain(NamedTuple):
    """A host suffix and the service it belongs to."""

    name: str
    service: str


# Ordered: the first matching suffix wins, so specific hosts precede broad ones.
DOMAINS: tuple[Domain, ...] = (
    Domain("dev.azure.com", "azdo"),
    Domain("management.azure.com", "arm"),
    Domain("management.core.windows.net", "arm"),
    Domain("graph.microsoft.com", "graph"),
    Domain("graph.windows.net", "graph"),
    Domain("login.microsoftonline.com", "aad"),
    Domain("vault.azure.net", "keyvault"),
    Domain("azurecr.io", "acr"),
    Domain("azconfig.io", "appconfig"),
    Domain("azure-api.net", "apim"),
    Domain("azurecontainerapps.io", "containerapps"),
    Domain("azurestaticapps.net", "staticwebapp"),
    Domain("azurewebsites.net", "appservice"),
    Domain("blob.core.windows.net", "storage"),
    Domain("documents.azure.com", "cosmosdb"),
    Domain("api.github.com", "github"),
    Domain("github.com", "github"),
    Domain("pypi.org", "pypi"),
    Domain("registry.npmjs.org", "npm"),
    Domain("docker.io", "docker"),
)

__all__ = ["DOMAINS", "Domain"]
