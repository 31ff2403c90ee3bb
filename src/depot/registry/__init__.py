"""Registry access for npm-style package registries.

Public API::

    from depot.registry import RegistryClient, create_client
"""

from __future__ import annotations

from depot.registry.http_client import create_client, download, get_json
from depot.registry.npm_registry import (
    DEFAULT_REGISTRY_URL,
    RegistryClient,
    ordered_versions,
)

__all__ = [
    "DEFAULT_REGISTRY_URL",
    "RegistryClient",
    "create_client",
    "download",
    "get_json",
    "ordered_versions",
]
