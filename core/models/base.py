"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- IdentityMixin: store-assigned integer primary key

The id is assigned by the store on insert and never reassigned. Ids grow
monotonically, so ordering by id is ordering by insertion.
"""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all catalog models."""
    pass


class IdentityMixin:
    """Mixin providing the store-assigned identity column."""

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
