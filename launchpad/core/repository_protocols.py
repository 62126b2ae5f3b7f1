"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Absence is a return value (None / False), never an exception
    - CacheLayer implementations raise CacheUnavailableError on any backend failure
    - Store implementations raise StoreError on any persistence failure

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions (pricing, aggregation) are never async themselves —
      the services orchestrate the async calls around the pure logic
"""

from datetime import datetime, timedelta
from typing import Protocol

from launchpad.core.catalog import CatalogItem
from launchpad.core.orders import Order, OrderTotals, PricedOrder, TopItem


class CatalogStore(Protocol):
    """Contract for durable catalog storage — implemented by shell."""
    async def get_by_id(self, item_id: int) -> CatalogItem | None: ...
    async def get_all(self) -> list[CatalogItem]: ...
    async def exists(self, item_id: int) -> bool: ...
    async def insert(self, item: CatalogItem) -> CatalogItem: ...
    async def update_full(self, item: CatalogItem) -> bool: ...
    async def delete_by_id(self, item_id: int) -> bool: ...
    async def query_page(
        self, offset: int, size: int,
    ) -> tuple[list[CatalogItem], int]: ...


class CacheLayer(Protocol):
    """Contract for the distributed key/value cache — implemented by shell."""
    async def get_string(self, key: str) -> str | None: ...
    async def set_string(self, key: str, value: str, ttl: timedelta) -> None: ...
    async def remove(self, key: str) -> None: ...


class OrderStore(Protocol):
    """Contract for order persistence — implemented by shell."""
    async def insert_order_with_items(
        self, priced: PricedOrder, created_at: datetime,
    ) -> Order: ...
    async def get_by_id(
        self, order_id: int, with_items: bool = True,
    ) -> Order | None: ...
    async def query_page(self, offset: int, size: int) -> list[Order]: ...
    async def query_by_date_range(
        self, from_date: datetime | None, to_date: datetime | None,
    ) -> OrderTotals: ...
    async def group_items_by_product(self, limit: int) -> list[TopItem]: ...
