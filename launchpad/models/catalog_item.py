"""CatalogItem ORM — persists one catalog entry (a book in the storefront).

Invariants:
    - id is an integer primary key assigned by the database, never reused by the app
    - price is NUMERIC(18, 2); stock and year are range-checked before insert
    - Rows are never handed out: the store maps them to core CatalogItem values

Design Decisions:
    - Row class named *Row: the domain owns the CatalogItem name
"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from launchpad.core.catalog import CatalogItem
from launchpad.db.base import Base


class CatalogItemRow(Base):
    """Catalog item table."""
    __tablename__ = "catalog_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    author: Mapped[str] = mapped_column(String(200), nullable=False)
    isbn: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_domain(self) -> CatalogItem:
        return CatalogItem(
            id=self.id,
            title=self.title,
            author=self.author,
            isbn=self.isbn,
            price=self.price,
            stock=self.stock,
            year=self.year,
        )
