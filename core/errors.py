"""Error taxonomy for catalog operations.

- ValidationError: a candidate record is missing fields or has bad types
- NotFoundError: the target id of an update/delete does not exist
- TransportError: the store is unreachable or a query failed

None of these are retried.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Raised when a record fails schema enforcement."""

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.details = details or []


class NotFoundError(CatalogError):
    """Raised when no record matches the requested id."""

    def __init__(self, item_id: str):
        super().__init__(f"Book not found: {item_id}")
        self.item_id = item_id


class TransportError(CatalogError):
    """Raised when the store cannot be reached or a query fails."""
