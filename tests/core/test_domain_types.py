"""Tests for cache key conventions and money helpers."""

from decimal import Decimal

import pytest

from launchpad.core.domain_types import CATALOG_ALL_KEY, TAX_RATE, catalog_item_key
from launchpad.core.money import has_cents_precision, round_money, to_decimal


def test_cache_keys_follow_item_convention():
    assert catalog_item_key(42) == "item:42"
    assert CATALOG_ALL_KEY == "item:all"


def test_tax_rate_constant():
    assert TAX_RATE == Decimal("0.08")


@pytest.mark.parametrize(
    "value, expected",
    [("2.345", "2.35"), ("2.344", "2.34"), ("-2.345", "-2.35"), ("0.005", "0.01")],
)
def test_round_money_is_half_up(value, expected):
    assert round_money(Decimal(value)) == Decimal(expected)


def test_to_decimal_goes_through_str_for_floats():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(3) == Decimal("3")


@pytest.mark.parametrize("value", ["nan", "inf", True, "twelve"])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        to_decimal(value)


def test_cents_precision():
    assert has_cents_precision(Decimal("1.10"))
    assert has_cents_precision(Decimal("7"))
    assert not has_cents_precision(Decimal("1.001"))
