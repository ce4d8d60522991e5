"""Catalog repository: book queries over the document-style base repository."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.repository import BaseRepository
from catalog.models.db_models import Book


class BookRepository(BaseRepository[Book]):
    """Repository for book listing, filter values and CRUD."""

    model = Book
    mutable_fields = frozenset({"title", "author", "price"})

    async def categories(self) -> list[str]:
        return await self.distinct("category")

    async def authors(self) -> list[str]:
        return await self.distinct("author")


# ---------------------------------------------------------------------------
# FastAPI dependency factory
# ---------------------------------------------------------------------------

def get_book_repository(
    session: AsyncSession = Depends(get_session),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
