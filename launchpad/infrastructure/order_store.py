"""SQL Order Store — OrderStore implementation over SQLAlchemy async sessions.

Invariants:
    - An order and all its line items are written in a single commit
    - query_page orders by created_at desc, id desc (stable across equal timestamps)
    - Timestamps are written and compared in UTC (SQLite stores them without an offset)
    - query_by_date_range bounds are inclusive; None leaves that side open
    - Sums over zero rows come back as 0.00, never None
    - group_items_by_product ranks by revenue desc, quantity desc, name asc

Design Decisions:
    - Aggregates computed in SQL (COUNT/SUM/GROUP BY): reports never load every order
    - Returns core records, never ORM rows
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select

from launchpad.core.domain_types import ZERO
from launchpad.core.orders import Order, OrderTotals, PricedOrder, TopItem
from launchpad.infrastructure.database import DatabaseSessionManager
from launchpad.models.order import OrderItemRow, OrderRow

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def _as_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


class SqlOrderStore:
    """Durable order storage."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def insert_order_with_items(
        self, priced: PricedOrder, created_at: datetime,
    ) -> Order:
        async with self._db.session() as session:
            row = OrderRow(
                created_at=_as_utc(created_at),
                subtotal=priced.subtotal,
                discount_percent=priced.discount_percent,
                discount_amount=priced.discount_amount,
                tax_rate=priced.tax_rate,
                tax_amount=priced.tax_amount,
                total=priced.total,
                items=[
                    OrderItemRow(
                        product_name=line.product_name,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        line_total=line.line_total,
                    )
                    for line in priced.lines
                ],
            )
            session.add(row)
            await session.commit()
            return row.to_domain()

    async def get_by_id(
        self, order_id: int, with_items: bool = True,
    ) -> Order | None:
        async with self._db.session() as session:
            row = await session.get(OrderRow, order_id)
            return row.to_domain(with_items) if row else None

    async def query_page(self, offset: int, size: int) -> list[Order]:
        async with self._db.session() as session:
            result = await session.execute(
                select(OrderRow)
                .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
                .offset(offset)
                .limit(size),
            )
            return [row.to_domain() for row in result.scalars().all()]

    async def query_by_date_range(
        self, from_date: datetime | None, to_date: datetime | None,
    ) -> OrderTotals:
        query = select(
            func.count(OrderRow.id),
            func.sum(OrderRow.total),
            func.sum(OrderRow.tax_amount),
            func.sum(OrderRow.discount_amount),
        )
        if from_date is not None:
            query = query.where(OrderRow.created_at >= _as_utc(from_date))
        if to_date is not None:
            query = query.where(OrderRow.created_at <= _as_utc(to_date))

        async with self._db.session() as session:
            count, revenue, tax, discount = (await session.execute(query)).one()
        return OrderTotals(
            order_count=count or 0,
            revenue=_as_decimal(revenue),
            tax=_as_decimal(tax),
            discount=_as_decimal(discount),
        )

    async def group_items_by_product(self, limit: int) -> list[TopItem]:
        total_quantity = func.sum(OrderItemRow.quantity).label("total_quantity")
        total_revenue = func.sum(OrderItemRow.line_total).label("total_revenue")
        query = (
            select(OrderItemRow.product_name, total_quantity, total_revenue)
            .group_by(OrderItemRow.product_name)
            .order_by(
                total_revenue.desc(),
                total_quantity.desc(),
                OrderItemRow.product_name,
            )
            .limit(limit)
        )
        async with self._db.session() as session:
            rows = (await session.execute(query)).all()
        return [
            TopItem(
                product_name=name,
                total_quantity=int(quantity),
                total_revenue=_as_decimal(revenue),
            )
            for name, quantity, revenue in rows
        ]
