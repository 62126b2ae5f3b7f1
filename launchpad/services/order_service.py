"""Order Service — prices requested line items and persists the priced order.

Invariants:
    - Pricing (pure) completes before any store work; a ValidationError means
      nothing was written
    - The order and its line items are persisted as one atomic unit
    - created_at defaults to now (UTC); a pinned value must be aware and is stored in UTC
    - get_order returns None for an unknown id (absence is not an error)
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal

from launchpad.core.aggregation import as_utc
from launchpad.core.orders import Order, OrderLineRequest
from launchpad.core.pricing import price
from launchpad.core.repository_protocols import OrderStore

logger = logging.getLogger(__name__)


class OrderService:
    """Creates and fetches orders."""

    def __init__(self, store: OrderStore):
        self._store = store

    async def create_order(
        self,
        items: Sequence[OrderLineRequest],
        discount_percent: Decimal | int | float | str = Decimal("0"),
        created_at: datetime | None = None,
    ) -> Order:
        priced = price(items, discount_percent)
        created_at = as_utc(created_at, "created_at") or datetime.now(timezone.utc)
        order = await self._store.insert_order_with_items(priced, created_at)
        logger.info(
            f"Created order {order.id} with {len(order.items)} items, total {order.total}",
            extra={"order_id": order.id},
        )
        return order

    async def get_order(self, order_id: int) -> Order | None:
        return await self._store.get_by_id(order_id, with_items=True)
