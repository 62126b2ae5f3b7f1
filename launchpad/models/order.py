"""Order ORM — persists a priced order and its line items as one aggregate.

Invariants:
    - Every money column is NUMERIC(18, 2); percentages are NUMERIC(5, 4)
    - order_items.order_id cascades on delete: an order owns its lines
    - created_at is stored in UTC
    - Orders are written once; nothing in the app updates them

Design Decisions:
    - Derived amounts persisted, not recomputed on read: reports sum stored values
      (ADR: the pricing engine is the single place arithmetic happens)
    - lazy="selectin" on items: one extra query per page instead of N
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from launchpad.core.orders import Order, OrderLineItem
from launchpad.db.base import Base


class OrderRow(Base):
    """Order aggregate root."""
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
    subtotal: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    discount_percent: Mapped[Decimal] = mapped_column(Numeric(5, 4), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 4), nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    items: Mapped[list["OrderItemRow"]] = relationship(
        "OrderItemRow", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="OrderItemRow.id",
    )

    def to_domain(self, with_items: bool = True) -> Order:
        created_at = self.created_at
        if created_at.tzinfo is None:
            # SQLite drops tzinfo; values were written as UTC
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=self.id,
            created_at=created_at,
            subtotal=self.subtotal,
            discount_percent=self.discount_percent,
            discount_amount=self.discount_amount,
            tax_rate=self.tax_rate,
            tax_amount=self.tax_amount,
            total=self.total,
            items=tuple(i.to_domain() for i in self.items) if with_items else (),
        )


class OrderItemRow(Base):
    """Order line item — belongs to exactly one order."""
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    product_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    line_total: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    order: Mapped["OrderRow"] = relationship("OrderRow", back_populates="items")

    def to_domain(self) -> OrderLineItem:
        return OrderLineItem(
            id=self.id,
            product_name=self.product_name,
            quantity=self.quantity,
            unit_price=self.unit_price,
            line_total=self.line_total,
        )
