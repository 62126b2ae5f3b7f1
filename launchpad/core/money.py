"""Money — Decimal coercion and half-up rounding shared by pricing and aggregation.

Invariants:
    - round_money always quantizes to 2 places with ROUND_HALF_UP
    - Floats are converted through str() so binary drift never enters a Decimal
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from launchpad.core.domain_types import MONEY_QUANTUM


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce a numeric input to Decimal. Raises ValueError on garbage."""
    if isinstance(value, bool):
        raise ValueError("booleans are not amounts")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"not a number: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"not a finite number: {value!r}")
    return amount


def round_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def has_cents_precision(value: Decimal) -> bool:
    """True if value has at most 2 fractional digits."""
    return value == value.quantize(MONEY_QUANTUM)
