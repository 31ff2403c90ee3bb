"""Client for npm-style package registries.

Registry layout::

    GET <base>/<name>              -> document with a ``versions`` mapping
    GET <base>/<name>/<version>    -> one published version
    GET <base>/<name>/<tag>        -> the version a dist-tag points at

Usage::

    async with create_client() as http:
        registry = RegistryClient(http)
        meta = await registry.get_metadata("express", "3.x")
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from depot.core.manifest import PackageMetadata
from depot.core.versioning import LATEST, RangeResolver, Version, is_specific_version
from depot.exceptions import MalformedVersionError, PackageNotFoundError, RegistryError
from depot.registry.http_client import get_json

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL: str = "https://registry.npmjs.org/"


def ordered_versions(document: dict[str, Any]) -> list[str]:
    """Return the keys of a bare-name document's ``versions`` mapping, ascending.

    Keys are sorted by :class:`Version`. If any key fails to parse the
    document order is kept as published.
    """
    versions = document.get("versions")
    if not isinstance(versions, dict):
        return []
    keys = [k for k in versions if isinstance(k, str)]
    try:
        return sorted(keys, key=Version.parse)
    except MalformedVersionError:
        logger.debug("Unparseable version key; keeping registry order")
        return keys


class RegistryClient:
    """Resolves package names and ranges to published metadata.

    Args:
        client: The session's ``httpx.AsyncClient``.
        base_url: Registry root, with or without a trailing slash.
        resolver: Range resolver used for non-specific ranges.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_REGISTRY_URL,
        resolver: RangeResolver | None = None,
    ) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/") + "/"
        self._resolver = resolver or RangeResolver()

    def package_url(self, name: str, version: str | None = None) -> str:
        """Build the registry URL for a package, optionally at a version or tag."""
        url = self.base_url + quote(name, safe="@")
        if version:
            url += "/" + quote(version, safe="")
        return url

    async def fetch_document(self, name: str, version: str | None = None) -> dict[str, Any]:
        """Fetch one registry document.

        Raises:
            PackageNotFoundError: On HTTP 404.
            RegistryError: On any other non-200 status or a non-object body.
        """
        url = self.package_url(name, version)
        logger.debug("Retrieving metadata from %s", url)
        status, document = await get_json(self._client, url)
        if status == 404:
            raise PackageNotFoundError(name, version or LATEST)
        if status != 200:
            raise RegistryError(
                f"Registry returned HTTP {status} for {name}@{version or LATEST}",
                url=url,
                status_code=status,
            )
        if not isinstance(document, dict):
            raise RegistryError(f"Unexpected registry document from {url}", url=url)
        return document

    async def get_metadata(self, name: str, version_range: str = LATEST) -> PackageMetadata:
        """Resolve *name* at *version_range* to one published version.

        Specific versions and ``latest`` are fetched directly. Anything else
        is matched against the package's version list; when nothing matches
        (or the range is not understood) the ``latest`` tag is used instead.

        Raises:
            PackageNotFoundError: If the package or the version is missing.
            RegistryError: For other registry failures.
            InvalidOperatorError: For a range with an unknown comparator.
            MalformedVersionError: For a range with an unparseable version.
        """
        version_range = version_range.strip() or LATEST
        if is_specific_version(version_range):
            return PackageMetadata.from_document(await self.fetch_document(name, version_range))

        listing = await self.fetch_document(name)
        matched = self._resolver.select_best_version(ordered_versions(listing), version_range)
        if not matched:
            logger.warning(
                "Not smart enough to understand version '%s', so using 'latest' "
                "instead for package '%s'.",
                version_range,
                name,
            )
            matched = LATEST
        return PackageMetadata.from_document(await self.fetch_document(name, matched))
