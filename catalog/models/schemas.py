"""Pydantic schemas for API request/response validation."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class BookCreate(BaseModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    price: float = Field(..., allow_inf_nan=False)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)


class BookUpdate(BaseModel):
    """Partial update. Only these fields can change; other keys are ignored."""

    title: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, allow_inf_nan=False)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class BookResponse(BaseModel):
    id: str
    title: str
    author: str
    price: float
    description: str
    category: str


class BookPage(BaseModel):
    """One page of a listing, serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    books: list[BookResponse]
    total_pages: int
    current_page: int
    total_books: int


class FilterValues(BaseModel):
    categories: list[str]
    authors: list[str]


class MessageResponse(BaseModel):
    message: str


class BookMessageResponse(MessageResponse):
    book: BookResponse
