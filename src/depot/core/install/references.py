"""Package references: what the user (or a manifest) asked to install.

A reference is classified once, up front, into one of four kinds:

====================  ================================================
Kind                  Input
====================  ================================================
``EMPTY``             ``None`` or blank: use the local ``package.json``
``URL``               ``http://`` / ``https://`` tarball location
``NAME``              ``name``, ``name@range`` or ``@scope/name[@range]``
``LOCAL_PATH``        any other text containing ``/`` or ``\\`` (unsupported)
====================  ================================================
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from depot.core.versioning import LATEST, is_usable_range

logger = logging.getLogger(__name__)

_URL_PREFIXES = ("http://", "https://")
_SCOPED_NAME_RE = re.compile(r"^(?P<name>@[^/\\@\s]+/[^/\\@\s]+)(?:@(?P<range>.*))?$")


class ReferenceKind(Enum):
    """Installation source of a package reference."""

    EMPTY = "empty"
    URL = "url"
    LOCAL_PATH = "local_path"
    NAME = "name"


@dataclass(frozen=True)
class PackageReference:
    """A classified package reference.

    Attributes:
        kind: The installation source.
        raw: The reference text as given.
        name: Package name (``NAME`` only).
        version_range: Range expression (``NAME`` only), ``latest`` by default.
    """

    kind: ReferenceKind
    raw: str = ""
    name: str = ""
    version_range: str = LATEST

    @classmethod
    def parse(cls, value: str | None) -> PackageReference:
        """Classify a reference string."""
        text = (value or "").strip()
        if not text:
            return cls(ReferenceKind.EMPTY)
        if text.startswith(_URL_PREFIXES):
            return cls(ReferenceKind.URL, raw=text)
        scoped = _SCOPED_NAME_RE.match(text)
        if scoped:
            return cls(
                ReferenceKind.NAME,
                raw=text,
                name=scoped.group("name"),
                version_range=(scoped.group("range") or "").strip() or LATEST,
            )
        if "/" in text or "\\" in text:
            return cls(ReferenceKind.LOCAL_PATH, raw=text)
        name, _, version_range = text.partition("@")
        return cls(
            ReferenceKind.NAME,
            raw=text,
            name=name.strip(),
            version_range=version_range.strip() or LATEST,
        )

    @classmethod
    def for_name(cls, name: str, version_range: str = LATEST) -> PackageReference:
        return cls(
            ReferenceKind.NAME,
            raw=f"{name}@{version_range}",
            name=name,
            version_range=version_range,
        )

    @classmethod
    def for_url(cls, url: str) -> PackageReference:
        return cls(ReferenceKind.URL, raw=url)

    @property
    def url(self) -> str:
        return self.raw if self.kind is ReferenceKind.URL else ""

    def __str__(self) -> str:
        if self.kind is ReferenceKind.EMPTY:
            return "<local manifest>"
        return self.raw


def dependency_reference(name: str, version_range: str) -> PackageReference:
    """Build the reference for one declared dependency.

    URL ranges install the URL. Ranges the resolver cannot use (wildcards,
    ``^``/``~`` ranges, bad comparators) fall back to ``latest`` with a
    warning.
    """
    if isinstance(version_range, str) and version_range.strip().startswith(_URL_PREFIXES):
        return PackageReference.for_url(version_range.strip())
    if is_usable_range(version_range):
        return PackageReference.for_name(name, version_range.strip())
    logger.warning(
        "Cannot use version range %r for dependency '%s'; installing '%s@%s' instead.",
        version_range,
        name,
        name,
        LATEST,
    )
    return PackageReference.for_name(name, LATEST)
