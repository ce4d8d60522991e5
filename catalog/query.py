"""Turn untrusted listing parameters into a page request.

Only three fields can be filtered on, each with a fixed match kind:

    title     case-insensitive substring
    category  exact
    author    exact

Pagination is skip-based: offset = (page - 1) * page_size. The slice and
the total are fetched in two round trips, so a write landing between them
can make total_pages disagree with the slice. That is accepted.
"""

import math
import re
from dataclasses import dataclass, field

from catalog.config import config
from core.filters import FieldFilter, MatchKind, SortOrder

FILTERABLE_FIELDS: dict[str, MatchKind] = {
    "title": MatchKind.SUBSTRING,
    "category": MatchKind.EXACT,
    "author": MatchKind.EXACT,
}

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_page(raw: str | int | None) -> int:
    """Parse the leading digits of a page number ("2abc" is 2).

    Missing, garbage or < 1 becomes 1.
    """
    if raw is None:
        return 1
    match = LEADING_INT.match(str(raw))
    if match is None:
        return 1
    page = int(match.group(1))
    return page if page >= 1 else 1


def parse_sort(raw: str | None, default: SortOrder = SortOrder.DESCENDING) -> SortOrder:
    """"desc" sorts newest first; any other value sorts oldest first."""
    if raw is None:
        return default
    return SortOrder.DESCENDING if raw.strip().lower() == SortOrder.DESCENDING.value else SortOrder.ASCENDING


def build_filters(
    title: str | None = None,
    category: str | None = None,
    author: str | None = None,
) -> tuple[FieldFilter, ...]:
    """Build the filter specification. Empty values impose no constraint."""
    values = {"title": title, "category": category, "author": author}
    return tuple(
        FieldFilter(field=name, match=FILTERABLE_FIELDS[name], value=value)
        for name, value in values.items()
        if value
    )


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


@dataclass(frozen=True)
class PageRequest:
    """A validated listing request."""

    page: int = 1
    filters: tuple[FieldFilter, ...] = field(default_factory=tuple)
    sort: SortOrder = SortOrder.DESCENDING

    def offset(self, page_size: int) -> int:
        return (self.page - 1) * page_size

    @classmethod
    def from_params(
        cls,
        page: str | int | None = None,
        title: str | None = None,
        category: str | None = None,
        author: str | None = None,
        sort: str | None = None,
    ) -> "PageRequest":
        return cls(
            page=parse_page(page),
            filters=build_filters(title=title, category=category, author=author),
            sort=parse_sort(sort, config.default_sort),
        )
