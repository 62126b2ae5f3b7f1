"""Tests for aggregation helpers — validation, summary arithmetic, top-item ranking."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from launchpad.core.aggregation import (
    build_summary, rank_top_items, validate_date_range, validate_page,
    validate_top_limit,
)
from launchpad.core.errors import ValidationError
from launchpad.core.orders import OrderTotals, TopItem


def test_validate_page_returns_offset():
    assert validate_page(1, 10) == 0
    assert validate_page(3, 25) == 50


@pytest.mark.parametrize(
    "page_number, page_size, field",
    [(0, 10, "page_number"), (-1, 10, "page_number"), (1, 0, "page_size"), (True, 5, "page_number")],
)
def test_validate_page_rejects_non_positive(page_number, page_size, field):
    with pytest.raises(ValidationError) as exc:
        validate_page(page_number, page_size)
    assert exc.value.field == field


def test_date_range_allows_open_and_equal_bounds():
    t = datetime(2026, 3, 1, tzinfo=timezone.utc)
    validate_date_range(None, None)
    validate_date_range(t, None)
    validate_date_range(None, t)
    validate_date_range(t, t)


def test_date_range_rejects_inverted_bounds():
    with pytest.raises(ValidationError) as exc:
        validate_date_range(
            datetime(2026, 3, 2, tzinfo=timezone.utc),
            datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
    assert exc.value.field == "from_date"


def test_date_range_converts_offsets_to_utc():
    plus_two = timezone(timedelta(hours=2))
    start, end = validate_date_range(
        datetime(2026, 3, 1, 13, 0, tzinfo=plus_two), None,
    )
    assert start == datetime(2026, 3, 1, 11, 0, tzinfo=timezone.utc)
    assert start.tzinfo is timezone.utc
    assert end is None


def test_date_range_rejects_naive_bounds():
    with pytest.raises(ValidationError) as exc:
        validate_date_range(None, datetime(2026, 3, 1))
    assert exc.value.field == "to_date"


@pytest.mark.parametrize("limit", [0, 101, -3])
def test_top_limit_bounds(limit):
    with pytest.raises(ValidationError):
        validate_top_limit(limit)


def test_top_limit_accepts_edges():
    assert validate_top_limit(1) == 1
    assert validate_top_limit(100) == 100


def test_summary_with_no_orders_has_zero_average():
    summary = build_summary(OrderTotals(0, Decimal("0"), Decimal("0"), Decimal("0")))
    assert summary.total_orders == 0
    assert summary.average_order_value == Decimal("0.00")
    assert summary.total_revenue == Decimal("0.00")


def test_summary_average_rounds_half_up():
    # 10.05 / 2 = 5.025 → 5.03
    summary = build_summary(
        OrderTotals(2, Decimal("10.05"), Decimal("0.74"), Decimal("0.00")),
    )
    assert summary.average_order_value == Decimal("5.03")
    assert summary.total_tax == Decimal("0.74")


def test_summary_echoes_date_bounds():
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    summary = build_summary(
        OrderTotals(1, Decimal("1.08"), Decimal("0.08"), Decimal("0")), start, None,
    )
    assert summary.from_date == start
    assert summary.to_date is None


def test_rank_orders_by_revenue_then_quantity():
    groups = [
        TopItem("low", 50, Decimal("10.00")),
        TopItem("tie-few", 2, Decimal("30.00")),
        TopItem("top", 1, Decimal("99.00")),
        TopItem("tie-many", 6, Decimal("30.00")),
    ]
    ranked = rank_top_items(groups, 10)
    assert [g.product_name for g in ranked] == ["top", "tie-many", "tie-few", "low"]


def test_rank_is_non_increasing_and_truncated():
    groups = [TopItem(f"p{i}", i % 3, Decimal(i % 4)) for i in range(20)]
    ranked = rank_top_items(groups, 5)
    assert len(ranked) == 5
    for a, b in zip(ranked, ranked[1:]):
        assert a.total_revenue >= b.total_revenue
        if a.total_revenue == b.total_revenue:
            assert a.total_quantity >= b.total_quantity


def test_rank_never_exceeds_distinct_groups():
    ranked = rank_top_items([TopItem("only", 1, Decimal("1.00"))], 100)
    assert len(ranked) == 1
