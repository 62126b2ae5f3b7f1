"""Catalog Item — domain record for the persistent catalog, plus field validation.

Invariants:
    - id is None until the store assigns one, immutable afterwards
    - price is Decimal with at most 2 fractional digits, 0.01–10000
    - stock 0–100000, year 1000–2100, title/author 1–200 chars (stripped)
    - isbn is optional (empty string); when present it must look like an ISBN-10/13

Design Decisions:
    - Frozen dataclass, not ORM row: the cache and the core never hold live DB state
    - validate_catalog_item raises on the first offending field (ADR: same shape as pricing)
"""

import re
from dataclasses import dataclass, replace
from decimal import Decimal

from launchpad.core.errors import ValidationError
from launchpad.core.money import has_cents_precision, to_decimal

MAX_TEXT_LENGTH = 200
MIN_PRICE = Decimal("0.01")
MAX_PRICE = Decimal("10000")
MAX_STOCK = 100_000
MIN_YEAR = 1000
MAX_YEAR = 2100

# optional "ISBN-13: " prefix, digits with hyphen/space separators, X only as last char
_ISBN_RE = re.compile(r"^(?:ISBN(?:-1[03])?:? )?(?P<body>[0-9][0-9 -]*[0-9X])$")


@dataclass(frozen=True)
class CatalogItem:
    """One catalog entry. Pure value, no IO."""
    title: str
    author: str
    price: Decimal
    stock: int
    year: int
    isbn: str = ""
    id: int | None = None

    def with_id(self, item_id: int) -> "CatalogItem":
        return replace(self, id=item_id)


def _check_text(value: str, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field)
    value = value.strip()
    if len(value) > MAX_TEXT_LENGTH:
        raise ValidationError(
            f"{field} must be between 1 and {MAX_TEXT_LENGTH} characters", field,
        )
    return value


def _check_int(value: int, field: str, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", field)
    if not low <= value <= high:
        raise ValidationError(f"{field} must be between {low} and {high}", field)
    return value


def _check_isbn(value: str) -> str:
    value = (value or "").strip()
    if not value:
        return ""
    match = _ISBN_RE.match(value)
    if not 10 <= len(value) <= 20 or not match:
        raise ValidationError("isbn format is invalid", "isbn")
    digits = match.group("body").replace("-", "").replace(" ", "")
    if len(digits) == 13 and digits.isdigit():
        return value
    if len(digits) == 10 and digits[:9].isdigit():
        return value
    raise ValidationError("isbn format is invalid", "isbn")


def validate_catalog_item(item: CatalogItem) -> CatalogItem:
    """Validate every field; returns a normalized copy (stripped text, Decimal price)."""
    title = _check_text(item.title, "title")
    author = _check_text(item.author, "author")
    isbn = _check_isbn(item.isbn)
    try:
        price = to_decimal(item.price)
    except ValueError:
        raise ValidationError("price must be a number", "price")
    if not MIN_PRICE <= price <= MAX_PRICE:
        raise ValidationError(
            f"price must be between {MIN_PRICE} and {MAX_PRICE}", "price",
        )
    if not has_cents_precision(price):
        raise ValidationError("price must have at most 2 decimal places", "price")
    stock = _check_int(item.stock, "stock", 0, MAX_STOCK)
    year = _check_int(item.year, "year", MIN_YEAR, MAX_YEAR)
    if item.id is not None:
        _check_int(item.id, "id", 1, 2**63 - 1)
    return replace(
        item, title=title, author=author, isbn=isbn, price=price,
        stock=stock, year=year,
    )


@dataclass(frozen=True)
class CatalogPage:
    """One page of the catalog plus the total row count from the same query window."""
    items: list[CatalogItem]
    page_number: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size)
