"""Order Pricing Engine — pure, deterministic computation of order totals.

Invariants:
    - Every step rounds to 2 places with ROUND_HALF_UP before feeding the next step
    - Step order is fixed: line totals → subtotal → discount → taxable → tax → total
    - taxable_amount = subtotal − discount_amount is exact (no separate rounding)
    - All preconditions checked before any arithmetic; the first violation raises
      ValidationError naming the offending field (e.g. "items[1].quantity")
    - No IO, no clock, no randomness — same input, same output

Design Decisions:
    - Decimal, never float: the rounding order is load-bearing and floats drift
    - Sum re-rounded even though every addend has 2 digits (representation guard)
"""

from collections.abc import Sequence
from decimal import Decimal

from launchpad.core.domain_types import TAX_RATE
from launchpad.core.errors import ValidationError
from launchpad.core.money import has_cents_precision, round_money, to_decimal
from launchpad.core.orders import OrderLineRequest, PricedLine, PricedOrder

MAX_PRODUCT_NAME_LENGTH = 200
MIN_QUANTITY = 1
MAX_QUANTITY = 100_000
MIN_UNIT_PRICE = Decimal("0.01")
MAX_UNIT_PRICE = Decimal("100000")
MIN_DISCOUNT = Decimal("0")
MAX_DISCOUNT = Decimal("1")


def _validate_line(line: OrderLineRequest, index: int) -> PricedLine:
    """Check one requested line; returns it with a normalized name and Decimal price."""
    prefix = f"items[{index}]"
    name = line.product_name.strip() if isinstance(line.product_name, str) else ""
    if not 1 <= len(name) <= MAX_PRODUCT_NAME_LENGTH:
        raise ValidationError(
            f"Product name must be between 1 and {MAX_PRODUCT_NAME_LENGTH} characters.",
            f"{prefix}.product_name",
        )

    quantity = line.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Quantity must be an integer.", f"{prefix}.quantity")
    if not MIN_QUANTITY <= quantity <= MAX_QUANTITY:
        raise ValidationError(
            f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}.",
            f"{prefix}.quantity",
        )

    try:
        unit_price = to_decimal(line.unit_price)
    except ValueError:
        raise ValidationError("Unit price must be a number.", f"{prefix}.unit_price")
    if not MIN_UNIT_PRICE <= unit_price <= MAX_UNIT_PRICE:
        raise ValidationError(
            f"Unit price must be between {MIN_UNIT_PRICE} and {MAX_UNIT_PRICE}.",
            f"{prefix}.unit_price",
        )
    if not has_cents_precision(unit_price):
        raise ValidationError(
            "Unit price must have at most 2 decimal places.", f"{prefix}.unit_price",
        )

    return PricedLine(
        product_name=name,
        quantity=quantity,
        unit_price=unit_price,
        line_total=round_money(unit_price * quantity),
    )


def validate_discount(discount_percent: Decimal | int | float | str) -> Decimal:
    try:
        discount = to_decimal(discount_percent)
    except ValueError:
        raise ValidationError("Discount percent must be a number.", "discount_percent")
    if not MIN_DISCOUNT <= discount <= MAX_DISCOUNT:
        raise ValidationError(
            "Discount percent must be between 0 and 1.", "discount_percent",
        )
    return discount


def price(
    items: Sequence[OrderLineRequest],
    discount_percent: Decimal | int | float | str = Decimal("0"),
) -> PricedOrder:
    """Price an order. Pure, no IO.

    Example: one line of 2 × 9.99 with a 10% discount gives subtotal 19.98,
    discount 2.00, taxable 17.98, tax 1.44, total 19.42.
    """
    if not items:
        raise ValidationError("At least one order item is required.", "items")
    discount = validate_discount(discount_percent)
    lines = tuple(_validate_line(line, i) for i, line in enumerate(items))

    subtotal = round_money(sum((line.line_total for line in lines), Decimal("0")))
    discount_amount = round_money(subtotal * discount)
    taxable_amount = subtotal - discount_amount
    tax_amount = round_money(taxable_amount * TAX_RATE)
    total = round_money(taxable_amount + tax_amount)

    return PricedOrder(
        lines=lines,
        subtotal=subtotal,
        discount_percent=discount,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_rate=TAX_RATE,
        tax_amount=tax_amount,
        total=total,
    )
