"""Catalog service: listings, filter values and mutations.

Every operation returns an explicit outcome (core.results) instead of
raising or returning None:

    list / filter_values  -> Found | Failure
    create                -> Found | Failure(ValidationError | TransportError)
    update / delete       -> Found | NotFound | Failure

The service is stateless; each call is one request/response round trip
against the store behind the repository.
"""

from __future__ import annotations

from typing import Any, Mapping

from fastapi import Depends
from loguru import logger
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError

from catalog.config import CatalogConfig, config as default_config
from catalog.models.schemas import BookCreate, BookPage, BookUpdate, FilterValues
from catalog.query import PageRequest, total_pages
from catalog.repository import BookRepository, get_book_repository
from core.errors import NotFoundError, TransportError, ValidationError
from core.repository import MAX_ID
from core.results import Failure, Found, NotFound, Outcome

STORE_ERRORS = (SQLAlchemyError, OSError)


def _schema_details(exc: SchemaError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "body",
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


class CatalogService:
    """Book catalog operations over a BookRepository."""

    def __init__(self, repository: BookRepository, config: CatalogConfig = default_config):
        self.repository = repository
        self.config = config

    def _store_failure(self, action: str, exc: Exception) -> Failure:
        logger.exception("Store failure while trying to {}", action)
        return Failure(TransportError(f"Failed to {action}: {exc}"))

    async def list(self, request: PageRequest) -> Outcome[BookPage]:
        """Fetch one page of books matching the request's filters.

        The slice and the total are separate queries (see catalog.query).
        A page past the end yields an empty slice with correct totals.
        """
        page_size = self.config.page_size
        offset = request.offset(page_size)
        try:
            books: list[dict] = []
            # No store can skip past MAX_ID rows; such a page is simply empty
            if offset <= MAX_ID:
                books = await self.repository.find(
                    filters=request.filters,
                    sort=request.sort,
                    skip=offset,
                    limit=page_size,
                )
            total = await self.repository.count(request.filters)
        except STORE_ERRORS as exc:
            return self._store_failure("list books", exc)

        return Found(
            BookPage(
                books=books,
                total_pages=total_pages(total, page_size),
                current_page=request.page,
                total_books=total,
            )
        )

    async def filter_values(self) -> Outcome[FilterValues]:
        """Distinct categories and authors, for filter dropdowns. Unpaginated."""
        try:
            categories = await self.repository.categories()
            authors = await self.repository.authors()
        except STORE_ERRORS as exc:
            return self._store_failure("load filter values", exc)

        return Found(FilterValues(categories=categories, authors=authors))

    async def create(self, data: Mapping[str, Any]) -> Outcome[dict]:
        try:
            record = BookCreate.model_validate(data)
        except SchemaError as exc:
            return Failure(ValidationError("Invalid book record", details=_schema_details(exc)))

        try:
            book = await self.repository.insert(record.model_dump())
        except STORE_ERRORS as exc:
            return self._store_failure("add book", exc)

        logger.info("Added book {} ({!r})", book["id"], book["title"])
        return Found(book)

    async def update(self, book_id: str, data: Mapping[str, Any]) -> Outcome[dict]:
        """Overwrite title/author/price of an existing book."""
        try:
            changes = BookUpdate.model_validate(data).model_dump(exclude_none=True)
        except SchemaError as exc:
            return Failure(ValidationError("Invalid book update", details=_schema_details(exc)))

        try:
            book = await self.repository.update_by_id(book_id, changes)
        except STORE_ERRORS as exc:
            return self._store_failure("update book", exc)

        if book is None:
            return NotFound(NotFoundError(book_id))
        logger.info("Updated book {} fields {}", book_id, sorted(changes))
        return Found(book)

    async def delete(self, book_id: str) -> Outcome[dict]:
        try:
            book = await self.repository.delete_by_id(book_id)
        except STORE_ERRORS as exc:
            return self._store_failure("delete book", exc)

        if book is None:
            return NotFound(NotFoundError(book_id))
        logger.info("Deleted book {}", book_id)
        return Found(book)


# ---------------------------------------------------------------------------
# FastAPI dependency factory
# ---------------------------------------------------------------------------

def get_catalog_service(
    repository: BookRepository = Depends(get_book_repository),
) -> CatalogService:
    """FastAPI dependency for CatalogService."""
    return CatalogService(repository)
