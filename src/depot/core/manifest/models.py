"""Package metadata data model.

``PackageMetadata`` is the typed view of a ``package.json`` document,
whether it was read from disk or returned by the registry. Mapping from
the raw document is tolerant: missing or wrongly typed optional fields
become empty defaults instead of errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MANIFEST_FILENAME = "package.json"


@dataclass(frozen=True)
class PackageMetadata:
    """Name, version, dependencies and archive location of one package.

    Attributes:
        name: Package name (also its directory name once installed).
        version: Version string exactly as published.
        dependencies: Mapping of dependency name to range expression, in
            document order.
        tarball_url: ``dist.tarball`` location of the package archive.
        raw: The source document, kept for callers that need extra fields.
    """

    name: str = ""
    version: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)
    tarball_url: str = ""
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_document(cls, document: Any) -> PackageMetadata:
        """Build metadata from a decoded JSON document.

        Non-string dependency ranges are mapped to ``""`` (any version).
        A list-valued ``dependencies`` field, as written by very old
        manifests, is treated as empty.

        Args:
            document: The decoded document; anything but a dict yields empty
                metadata.
        """
        if not isinstance(document, dict):
            return cls()

        dependencies: dict[str, str] = {}
        raw_deps = document.get("dependencies")
        if isinstance(raw_deps, dict):
            for dep_name, dep_range in raw_deps.items():
                dependencies[str(dep_name)] = dep_range if isinstance(dep_range, str) else ""

        dist = document.get("dist")
        tarball = dist.get("tarball", "") if isinstance(dist, dict) else ""

        return cls(
            name=_as_str(document.get("name")),
            version=_as_str(document.get("version")),
            dependencies=dependencies,
            tarball_url=_as_str(tarball),
            raw=document,
        )

    @property
    def label(self) -> str:
        """``name@version`` for messages, or just the name if unversioned."""
        return f"{self.name}@{self.version}" if self.version else self.name


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""
