"""Range expressions and best-version selection.

A range expression is one of:

- ``""`` or ``"latest"``: no constraints, resolved by the registry's
  ``latest`` tag.
- An exact version or tag token (``"1.2.3"``, ``"beta"``).
- A space-separated list of comparator terms, all of which must hold
  (``">= 1.0 < 2.0"``).
- The wildcard shorthand ``<prefix>.<n>.x`` (or ``<n>.x``), rewritten to
  ``>= <prefix>.<n> < <prefix>.<n+1>``.

Caret, tilde, hyphen and ``||`` ranges are not understood; selection
returns ``None`` for them and callers fall back to ``latest``.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from depot.core.versioning.constraints import Constraint
from depot.exceptions import InvalidOperatorError, MalformedVersionError

LATEST = "latest"

# Wildcards that carry no version information at all.
WILDCARD_RANGES: frozenset[str] = frozenset({"", "*", "x", "X"})

_SHORTHAND_RE = re.compile(r"^(?:(?P<prefix>[.\dA-Za-z]*)\.)?(?P<last>\d+)\.[xX]$")
_TERM_RE = re.compile(r"([<>=]+)\s*(\S*)")
_EXACT_TOKEN_RE = re.compile(r"^[.\dA-Za-z]*$")
_SPECIFIC_VERSION_RE = re.compile(r"^[=v]?\d+\.\d+\.\d+\S*$")


def is_specific_version(token: str) -> bool:
    """Return True for ``"latest"`` or a full ``major.minor.patch`` version.

    Such tokens are fetched from the registry directly, without consulting
    the version list.
    """
    token = token.strip()
    return token == LATEST or bool(_SPECIFIC_VERSION_RE.match(token))


def expand_shorthand(expression: str) -> str:
    """Rewrite ``1.7.x`` as ``>= 1.7 < 1.8``; other input is returned unchanged."""
    m = _SHORTHAND_RE.match(expression.strip())
    if not m:
        return expression
    last = int(m.group("last"))
    prefix = m.group("prefix")
    if prefix is None:
        return f">= {last} < {last + 1}"
    return f">= {prefix}.{last} < {prefix}.{last + 1}"


@lru_cache(maxsize=256)
def parse_range(expression: str) -> tuple[Constraint, ...]:
    """Extract the constraints of a range expression, left to right.

    Raises:
        InvalidOperatorError: If a comparator run is not one of the five
            recognised operators (``==`` and ``=>`` are rejected).
        MalformedVersionError: If a comparator is followed by a non-version.
    """
    if expression in ("", LATEST):
        return ()
    rewritten = expand_shorthand(expression)
    return tuple(
        Constraint(m.group(1), m.group(2)) for m in _TERM_RE.finditer(rewritten)
    )


def is_usable_range(expression: str) -> bool:
    """Return True if *expression* can be handed to the registry as a range.

    Wildcards, expressions with invalid comparators or versions, and any
    syntax the resolver does not understand are not usable.
    """
    if not isinstance(expression, str):
        return False
    expression = expression.strip()
    if expression in WILDCARD_RANGES:
        return False
    if is_specific_version(expression):
        return True
    try:
        constraints = parse_range(expression)
    except (InvalidOperatorError, MalformedVersionError):
        return False
    return bool(constraints) or bool(_EXACT_TOKEN_RE.match(expression))


class RangeResolver:
    """Selects the best candidate version for a range expression.

    The resolver does not sort its input. ``known_versions`` must already be
    in ascending order; the highest satisfying version then wins because
    every later match replaces the earlier one.
    """

    def constraints_for(self, expression: str) -> tuple[Constraint, ...]:
        """Return the (memoized) constraints of *expression*."""
        return parse_range(expression)

    def select_best_version(
        self, known_versions: Iterable[str], range_expr: str
    ) -> str | None:
        """Pick the newest version in *known_versions* that satisfies *range_expr*.

        Args:
            known_versions: Candidate version strings, ascending.
            range_expr: A range expression (see module docstring).

        Returns:
            ``range_expr`` itself for ``""``/``"latest"`` and for bare exact
            tokens, the best satisfying candidate, or ``None`` when nothing
            matches or the expression is not understood.

        Raises:
            InvalidOperatorError: For unrecognised comparators.
            MalformedVersionError: For unparseable range or candidate versions.
        """
        if range_expr in ("", LATEST):
            return range_expr

        constraints = self.constraints_for(range_expr)
        if not constraints:
            if _EXACT_TOKEN_RE.match(range_expr):
                return range_expr
            return None

        best: str | None = None
        for candidate in known_versions:
            if all(c.satisfied_by(candidate) for c in constraints):
                best = candidate
        return best


_default_resolver = RangeResolver()


def select_best_version(known_versions: Iterable[str], range_expr: str) -> str | None:
    """Module-level shortcut for :meth:`RangeResolver.select_best_version`."""
    return _default_resolver.select_best_version(known_versions, range_expr)
