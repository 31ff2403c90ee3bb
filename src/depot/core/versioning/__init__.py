"""Version parsing, comparator constraints, and range resolution.

Public API::

    from depot.core.versioning import Version, Constraint, RangeResolver
    from depot.core.versioning import select_best_version

    select_best_version(["1.0.0", "1.5.0", "2.0.0"], ">= 1.0 < 2.0")  # "1.5.0"
"""

from depot.core.versioning.constraints import OPERATORS, Constraint
from depot.core.versioning.ranges import (
    LATEST,
    WILDCARD_RANGES,
    RangeResolver,
    expand_shorthand,
    is_specific_version,
    is_usable_range,
    parse_range,
    select_best_version,
)
from depot.core.versioning.version import Version, compare_versions

__all__ = [
    "Constraint",
    "LATEST",
    "OPERATORS",
    "RangeResolver",
    "Version",
    "WILDCARD_RANGES",
    "compare_versions",
    "expand_shorthand",
    "is_specific_version",
    "is_usable_range",
    "parse_range",
    "select_best_version",
]
