"""Filter specifications for repository queries.

A filter specification is a tuple of FieldFilter values, each naming one
column, how to match it and the value to match. Repositories translate a
specification into SQL at the store boundary; nothing else ever builds
store-native query objects from request input.
"""

from dataclasses import dataclass
from enum import Enum


class MatchKind(str, Enum):
    EXACT = "exact"
    SUBSTRING = "substring"


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class FieldFilter:
    """One constraint on one field. Constraints in a specification are ANDed."""

    field: str
    match: MatchKind
    value: str


def escape_like(value: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )
