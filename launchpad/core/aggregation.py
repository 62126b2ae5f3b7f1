"""Order Aggregation — pure validation and reduction helpers for order reporting.

Invariants:
    - Pagination arguments are >= 1; offset = (page_number - 1) * page_size
    - Date bounds are timezone-aware and compared in UTC; naive bounds are rejected
    - from_date <= to_date when both bounds are given (either bound may be open)
    - top-items limit is 1–100
    - average_order_value = round_half_up(revenue / orders, 2), or 0.00 when no orders
    - Top items ordered by revenue desc, quantity desc, product name asc

Design Decisions:
    - Pure functions, not service methods (ADR: the service owns IO, the core owns arithmetic)
    - rank_top_items re-sorts whatever the store returns: ordering is a core guarantee,
      not a SQL dialect detail
"""

from collections.abc import Iterable
from datetime import datetime, timezone

from launchpad.core.domain_types import ZERO
from launchpad.core.errors import ValidationError
from launchpad.core.money import round_money
from launchpad.core.orders import OrderSummary, OrderTotals, TopItem

MIN_TOP_LIMIT = 1
MAX_TOP_LIMIT = 100


def validate_page(page_number: int, page_size: int) -> int:
    """Validate pagination and return the row offset."""
    if isinstance(page_number, bool) or not isinstance(page_number, int) or page_number < 1:
        raise ValidationError("Page number must be greater than 0.", "page_number")
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValidationError("Page size must be greater than 0.", "page_size")
    return (page_number - 1) * page_size


def as_utc(value: datetime | None, field: str) -> datetime | None:
    """Normalize an aware datetime to UTC. Naive values are rejected."""
    if value is None:
        return None
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"{field} must include a UTC offset.", field)
    return value.astimezone(timezone.utc)


def validate_date_range(
    from_date: datetime | None, to_date: datetime | None,
) -> tuple[datetime | None, datetime | None]:
    """Validate the bounds and return them converted to UTC."""
    from_date = as_utc(from_date, "from_date")
    to_date = as_utc(to_date, "to_date")
    if from_date is not None and to_date is not None and from_date > to_date:
        raise ValidationError("from_date must be earlier than to_date.", "from_date")
    return from_date, to_date


def validate_top_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError("Limit must be an integer.", "limit")
    if not MIN_TOP_LIMIT <= limit <= MAX_TOP_LIMIT:
        raise ValidationError(
            f"Limit must be between {MIN_TOP_LIMIT} and {MAX_TOP_LIMIT}.", "limit",
        )
    return limit


def build_summary(
    totals: OrderTotals,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
) -> OrderSummary:
    """Turn raw store sums into a summary. Never divides by zero."""
    revenue = round_money(totals.revenue)
    average = (
        round_money(revenue / totals.order_count)
        if totals.order_count > 0 else ZERO
    )
    return OrderSummary(
        total_orders=totals.order_count,
        total_revenue=revenue,
        total_tax=round_money(totals.tax),
        total_discount=round_money(totals.discount),
        average_order_value=average,
        from_date=from_date,
        to_date=to_date,
    )


def rank_top_items(groups: Iterable[TopItem], limit: int) -> list[TopItem]:
    """Order product groups best-first and keep the first `limit`."""
    ranked = sorted(
        groups,
        key=lambda g: (-g.total_revenue, -g.total_quantity, g.product_name),
    )
    return ranked[:limit]
