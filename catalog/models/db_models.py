"""SQLAlchemy models for the catalog.

The to_dict() method provides the serialisation used by repositories and
routers; ids leave the store as opaque strings.
"""

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, IdentityMixin


class Book(IdentityMixin, Base):
    """A book in the catalog."""

    __tablename__ = "books"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "author": self.author,
            "price": self.price,
            "description": self.description,
            "category": self.category,
        }
