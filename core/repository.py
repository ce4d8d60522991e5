"""Async repository with a document-store shaped interface.

Provides a generic base repository exposing the operations the catalog
needs from its store: find, count, distinct, insert, update-by-id and
delete-by-id. Filter specifications (see core.filters) are translated
into SQL clauses here and nowhere else.

Every write commits immediately: there are no multi-statement
transactions and concurrent updates to one record are last-write-wins.

Subclass and set `model` to your SQLAlchemy model::

    class BookRepository(BaseRepository[Book]):
        model = Book
        mutable_fields = frozenset({"title", "author", "price"})
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.filters import FieldFilter, MatchKind, SortOrder, escape_like
from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)

# Largest value a signed 64-bit integer column can hold
MAX_ID = 2**63 - 1


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository over one SQLAlchemy model."""

    model: type[ModelT]
    mutable_fields: frozenset[str] = frozenset()

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- Filter translation --

    def _clause(self, criterion: FieldFilter) -> ColumnElement[bool]:
        column = getattr(self.model, criterion.field, None)
        if column is None:
            raise ValueError(f"Unknown filter field: {criterion.field}")
        if criterion.match is MatchKind.SUBSTRING:
            return column.ilike(f"%{escape_like(criterion.value)}%", escape="\\")
        return column == criterion.value

    def _where(self, stmt, filters: Sequence[FieldFilter]):
        for criterion in filters:
            stmt = stmt.where(self._clause(criterion))
        return stmt

    @staticmethod
    def _parse_id(item_id: str | int) -> int | None:
        """Ids are opaque to callers; anything that is not one of ours matches nothing."""
        try:
            pk = int(item_id)
        except (TypeError, ValueError):
            return None
        return pk if 0 < pk <= MAX_ID else None

    # -- Reads --

    async def find(
        self,
        filters: Sequence[FieldFilter] = (),
        sort: SortOrder = SortOrder.DESCENDING,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict]:
        """Return matching records ordered by identity."""
        order = self.model.id.desc() if sort is SortOrder.DESCENDING else self.model.id.asc()
        stmt = self._where(select(self.model), filters).order_by(order).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [row.to_dict() for row in result.scalars().all()]

    async def count(self, filters: Sequence[FieldFilter] = ()) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def distinct(self, field: str) -> list[Any]:
        """Unique values of one column across all records, sorted."""
        column = getattr(self.model, field)
        stmt = select(column).distinct().order_by(column)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, item_id: str | int) -> dict | None:
        pk = self._parse_id(item_id)
        if pk is None:
            return None
        item = await self.session.get(self.model, pk)
        return item.to_dict() if item else None

    # -- Writes --

    async def insert(self, data: dict[str, Any]) -> dict:
        """Persist a new record and return it with its assigned id."""
        item = self.model(**data)
        self.session.add(item)
        await self.session.commit()
        return item.to_dict()

    async def update_by_id(self, item_id: str | int, data: dict[str, Any]) -> dict | None:
        """Overwrite mutable fields in place. Returns None if not found."""
        pk = self._parse_id(item_id)
        if pk is None:
            return None
        item = await self.session.get(self.model, pk)
        if item is None:
            return None

        for key, value in data.items():
            if key in self.mutable_fields:
                setattr(item, key, value)

        await self.session.commit()
        return item.to_dict()

    async def delete_by_id(self, item_id: str | int) -> dict | None:
        """Delete a record. Returns the removed record, or None if not found."""
        pk = self._parse_id(item_id)
        if pk is None:
            return None
        item = await self.session.get(self.model, pk)
        if item is None:
            return None

        removed = item.to_dict()
        await self.session.delete(item)
        await self.session.commit()
        return removed
