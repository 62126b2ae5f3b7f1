"""Order Aggregation Service — paginated listing and reporting over persisted orders.

Invariants:
    - All reads go straight to the store (order data is never cached)
    - Arguments validated before any store call
    - A page past the end is an empty list, never an error
    - summarize with no bounds aggregates every persisted order

Design Decisions:
    - Arithmetic (average, ranking) lives in core/aggregation.py; this class only
      sequences validation → store query → pure reduction
"""

import logging
from datetime import datetime

from launchpad.core.aggregation import (
    build_summary, rank_top_items, validate_date_range, validate_page,
    validate_top_limit,
)
from launchpad.core.orders import Order, OrderSummary, TopItem
from launchpad.core.repository_protocols import OrderStore

logger = logging.getLogger(__name__)


class OrderAggregationService:
    """Reporting queries over the order store."""

    def __init__(self, store: OrderStore):
        self._store = store

    async def list_orders(self, page_number: int, page_size: int) -> list[Order]:
        offset = validate_page(page_number, page_size)
        return await self._store.query_page(offset, page_size)

    async def summarize(
        self,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
    ) -> OrderSummary:
        from_date, to_date = validate_date_range(from_date, to_date)
        totals = await self._store.query_by_date_range(from_date, to_date)
        summary = build_summary(totals, from_date, to_date)
        logger.debug(
            f"Summarized {summary.total_orders} orders "
            f"(revenue {summary.total_revenue})",
        )
        return summary

    async def top_items(self, limit: int = 5) -> list[TopItem]:
        limit = validate_top_limit(limit)
        groups = await self._store.group_items_by_product(limit)
        return rank_top_items(groups, limit)
