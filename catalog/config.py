"""Catalog configuration.

These values are fixed for the service; callers cannot override them
through the API.
"""

from dataclasses import dataclass

from core.filters import SortOrder

PAGE_SIZE = 6


@dataclass(frozen=True)
class CatalogConfig:
    """Listing behaviour shared by the service and the router."""

    page_size: int = PAGE_SIZE
    default_sort: SortOrder = SortOrder.DESCENDING

    @classmethod
    def default(cls) -> "CatalogConfig":
        """Create config with all defaults."""
        return cls()


# Default configuration instance
config = CatalogConfig.default()
