"""Domain Types — identity types, money constants and cache key conventions.

Invariants:
    - CatalogItemId and OrderId wrap store-assigned ints
    - Money is Decimal with exactly 2 fractional digits (MONEY_QUANTUM)
    - TAX_RATE is a fixed constant (never configurable per order)
    - Cache keys follow item:{id} and item:all — nothing else is cached

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Key builders as functions: one place owns the naming convention
"""

from decimal import Decimal
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CatalogItemId = NewType("CatalogItemId", int)
OrderId = NewType("OrderId", int)


# ─── Money ───────────────────────────────────────────────────────

MONEY_QUANTUM = Decimal("0.01")
TAX_RATE = Decimal("0.08")
ZERO = Decimal("0.00")


# ─── Cache Keys ──────────────────────────────────────────────────

CATALOG_ALL_KEY = "item:all"


def catalog_item_key(item_id: int) -> str:
    return f"item:{item_id}"
