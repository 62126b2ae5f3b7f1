"""Order Records — pure value types for pricing input/output, persisted orders and reports.

Invariants:
    - All money fields are Decimal quantized to 2 places
    - Order/OrderLineItem are immutable after creation (store only assigns ids)
    - PricedOrder is handed to the OrderStore unchanged

Design Decisions:
    - Frozen dataclasses with tuple collections: safe to share across tasks
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class OrderLineRequest:
    """A requested line: what the caller asked for, before pricing."""
    product_name: str
    quantity: int
    unit_price: Decimal | int | float | str


@dataclass(frozen=True)
class PricedLine:
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class PricedOrder:
    """Output of the pricing engine — every derived amount plus the priced lines."""
    lines: tuple[PricedLine, ...]
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal

    @property
    def line_totals(self) -> list[Decimal]:
        return [line.line_total for line in self.lines]


@dataclass(frozen=True)
class OrderLineItem:
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    id: int | None = None


@dataclass(frozen=True)
class Order:
    """A persisted, priced order."""
    id: int
    created_at: datetime
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total: Decimal
    items: tuple[OrderLineItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class OrderTotals:
    """Raw sums over a set of orders, as returned by the store."""
    order_count: int
    revenue: Decimal
    tax: Decimal
    discount: Decimal


@dataclass(frozen=True)
class OrderSummary:
    total_orders: int
    total_revenue: Decimal
    total_tax: Decimal
    total_discount: Decimal
    average_order_value: Decimal
    from_date: datetime | None = None
    to_date: datetime | None = None


@dataclass(frozen=True)
class TopItem:
    product_name: str
    total_quantity: int
    total_revenue: Decimal
