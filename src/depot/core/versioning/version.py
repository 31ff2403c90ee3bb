"""Dotted numeric versions with an opaque trailing tag.

A version is the leading ``\\d+(.\\d+)*`` run of a string, optionally
prefixed by ``=`` or ``v``. Whatever follows the numeric run (``-beta.2``,
``rc1``, ``+build``) is kept as a tag for display but never takes part in
ordering: ``1.2.3-beta`` and ``1.2.3`` compare equal.

Segments are compared as integers, most significant first. Missing
trailing segments count as zero, so ``1.7`` and ``1.7.0`` are the same
point on the ordering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from itertools import zip_longest

from depot.exceptions import MalformedVersionError

_VERSION_RE = re.compile(r"^[=v]?\s*(?P<numbers>\d+(?:\.\d+)*)(?P<tag>.*)$")


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """An immutable, totally ordered version.

    Attributes:
        segments: Integer segments, most significant first.
        tag: Everything after the numeric run, verbatim.
    """

    segments: tuple[int, ...]
    tag: str = ""
    raw: str = field(default="", repr=False)

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a version string.

        Args:
            value: Text such as ``"1.2.3"``, ``"v2.0"`` or ``"=1.0.0-rc1"``.

        Returns:
            The parsed Version.

        Raises:
            MalformedVersionError: If no leading numeric dotted run exists.
        """
        if not isinstance(value, str):
            raise MalformedVersionError(repr(value))
        m = _VERSION_RE.match(value.strip())
        if not m:
            raise MalformedVersionError(value)
        segments = tuple(int(part) for part in m.group("numbers").split("."))
        return cls(segments=segments, tag=m.group("tag"), raw=value)

    def compare(self, other: Version) -> int:
        """Return negative, zero or positive as self is below, equal or above other."""
        for mine, theirs in zip_longest(self.segments, other.segments, fillvalue=0):
            if mine != theirs:
                return -1 if mine < theirs else 1
        return 0

    def _normalized(self) -> tuple[int, ...]:
        segments = list(self.segments)
        while len(segments) > 1 and segments[-1] == 0:
            segments.pop()
        return tuple(segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(self._normalized())

    def __str__(self) -> str:
        return ".".join(str(s) for s in self.segments) + self.tag


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings numerically.

    >>> compare_versions("2.0.0", "10.0.0") < 0
    True

    Raises:
        MalformedVersionError: If either string does not parse.
    """
    return Version.parse(a).compare(Version.parse(b))
