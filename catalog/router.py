"""Catalog API router.

Endpoints under /books:
- GET    /books          : one page of books (page, title, category, author, sort)
- GET    /books/filters  : distinct categories and authors
- POST   /books          : add a book
- PUT    /books/{id}     : update title/author/price
- DELETE /books/{id}     : remove a book

Handlers only translate between HTTP and service outcomes. Every failure
leaves as a JSON body with a human-readable message.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse

from catalog.models.schemas import (
    BookMessageResponse,
    BookPage,
    BookResponse,
    FilterValues,
    MessageResponse,
)
from catalog.query import PageRequest
from catalog.service import CatalogService, get_catalog_service
from core.errors import ValidationError
from core.results import Failure, Found, NotFound, Outcome

router = APIRouter()

NOT_FOUND_MESSAGE = "Book not found"


def _failure_response(request: Request, failure: Failure, message: str) -> JSONResponse:
    """422 for validation failures, 500 for everything else."""
    error = failure.error
    content: dict[str, Any] = {"message": message}
    if isinstance(error, ValidationError):
        content["errors"] = error.details
        return JSONResponse(status_code=422, content=content)

    if request.app.state.settings.is_development:
        content["error"] = error.message
    return JSONResponse(status_code=500, content=content)


def _error_response(request: Request, outcome: Outcome, failure_message: str) -> JSONResponse:
    if isinstance(outcome, NotFound):
        return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})
    return _failure_response(request, outcome, failure_message)


# ============================================================================
# Listing
# ============================================================================

@router.get("/books", response_model=BookPage)
async def list_books(
    request: Request,
    page: Optional[str] = Query(None, description="1-based page number; invalid values mean 1"),
    title: Optional[str] = Query(None, description="Case-insensitive title substring"),
    category: Optional[str] = Query(None, description="Exact category"),
    author: Optional[str] = Query(None, description="Exact author"),
    sort: Optional[str] = Query(None, description="'desc' (default) or 'asc'"),
    service: CatalogService = Depends(get_catalog_service),
):
    """List books with filtering and pagination (6 per page)."""
    page_request = PageRequest.from_params(
        page=page, title=title, category=category, author=author, sort=sort
    )
    outcome = await service.list(page_request)
    if not isinstance(outcome, Found):
        return _error_response(request, outcome, "Error fetching books")
    return outcome.value


@router.get("/books/filters", response_model=FilterValues)
async def get_filters(
    request: Request,
    service: CatalogService = Depends(get_catalog_service),
):
    """Distinct categories and authors for the filter dropdowns."""
    outcome = await service.filter_values()
    if not isinstance(outcome, Found):
        return _error_response(request, outcome, "Error fetching filters")
    return outcome.value


# ============================================================================
# Mutations
# ============================================================================

@router.post("/books", status_code=201, response_model=BookMessageResponse)
async def add_book(
    request: Request,
    payload: Any = Body(...),
    service: CatalogService = Depends(get_catalog_service),
):
    """Add a new book to the catalog."""
    outcome = await service.create(payload)
    if not isinstance(outcome, Found):
        return _error_response(request, outcome, "Failed to add book")
    return BookMessageResponse(message="Book added successfully", book=BookResponse(**outcome.value))


@router.put("/books/{book_id}", response_model=BookMessageResponse)
async def update_book(
    request: Request,
    book_id: str,
    payload: Any = Body(...),
    service: CatalogService = Depends(get_catalog_service),
):
    """Update a book's title, author or price."""
    outcome = await service.update(book_id, payload)
    if not isinstance(outcome, Found):
        return _error_response(request, outcome, "Failed to update book")
    return BookMessageResponse(message="Book updated successfully", book=BookResponse(**outcome.value))


@router.delete("/books/{book_id}", response_model=MessageResponse)
async def delete_book(
    request: Request,
    book_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    """Remove a book from the catalog."""
    outcome = await service.delete(book_id)
    if not isinstance(outcome, Found):
        return _error_response(request, outcome, "Failed to delete book")
    return MessageResponse(message="Book deleted successfully")
