"""Single-comparator version constraints.

A constraint pairs one of the five comparators ``<``, ``<=``, ``=``,
``>=``, ``>`` with a :class:`Version`. Both parts are validated when the
constraint is built, so a constraint that exists is always usable.
"""

from __future__ import annotations

import operator as _op
from dataclasses import dataclass
from typing import Callable

from depot.core.versioning.version import Version
from depot.exceptions import InvalidOperatorError

# Maps each comparator to a test on the result of Version.compare().
_COMPARISON_TESTS: dict[str, Callable[[int, int], bool]] = {
    "<": _op.lt,
    "<=": _op.le,
    "=": _op.eq,
    ">=": _op.ge,
    ">": _op.gt,
}

OPERATORS: frozenset[str] = frozenset(_COMPARISON_TESTS)


@dataclass(frozen=True, init=False)
class Constraint:
    """One comparator applied to one version.

    Attributes:
        operator: One of ``<``, ``<=``, ``=``, ``>=``, ``>``.
        value: The version the comparator is anchored to.

    Example::

        Constraint(">=", "1.7").satisfied_by("1.7.3")   # True
        Constraint("<", "1.8").satisfied_by("1.8.0")    # False
    """

    operator: str
    value: Version

    def __init__(self, operator: str, value: Version | str) -> None:
        if operator not in OPERATORS:
            raise InvalidOperatorError(operator)
        if not isinstance(value, Version):
            value = Version.parse(value)
        object.__setattr__(self, "operator", operator)
        object.__setattr__(self, "value", value)

    def satisfied_by(self, version: str | Version) -> bool:
        """Check whether *version* satisfies this constraint.

        Raises:
            MalformedVersionError: If *version* is a string that does not parse.
        """
        candidate = version if isinstance(version, Version) else Version.parse(version)
        return _COMPARISON_TESTS[self.operator](candidate.compare(self.value), 0)

    def __str__(self) -> str:
        return f"{self.operator}{self.value}"
