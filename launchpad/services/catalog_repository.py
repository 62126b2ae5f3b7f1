"""Cache-Aside Catalog Repository — reads through the cache, invalidates on writes.

Invariants:
    - Reads (get_all, get_by_id) check the cache first; on miss, read the store and
      populate the cache with the default TTL
    - Empty catalogs and absent items are never cached
    - exists() and get_paginated() always go straight to the store
    - Writes: store write completes BEFORE any cache invalidation is issued
        add    → removes item:all (does not prime item:{new id})
        update → removes item:{id} and item:all
        delete → removes item:{id} and item:all
    - Cache failures are fail-open: logged at WARNING, never raised to the caller
    - Store failures (StoreError) propagate untouched; nothing is retried
    - No locks: concurrent callers interleave freely

Design Decisions:
    - Cache and store injected at construction (ADR: no global cache handle — tests
      swap in an in-memory fake with a controllable clock)
    - A payload that fails schema decoding is treated as a miss and overwritten
      from the store (ADR: typed CachePayloadError, logged, not fatal)
    - Lost invalidation is a known, accepted race: a reader that missed before a
      writer's commit can repopulate the cache with the pre-write row after the
      writer's invalidation. Staleness is bounded by the TTL; versioned keys or
      write-through would be needed to close it.
"""

import logging
from datetime import timedelta

from launchpad.core.aggregation import validate_page
from launchpad.core.catalog import CatalogItem, CatalogPage, validate_catalog_item
from launchpad.core.domain_types import CATALOG_ALL_KEY, catalog_item_key
from launchpad.core.errors import (
    CachePayloadError, CacheUnavailableError, ValidationError,
)
from launchpad.core.repository_protocols import CacheLayer, CatalogStore
from launchpad.schemas.cache import (
    decode_collection, decode_item, encode_collection, encode_item,
)

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = timedelta(minutes=5)


class CacheAsideRepository:
    """Catalog reads and writes with cache-aside consistency."""

    def __init__(
        self,
        store: CatalogStore,
        cache: CacheLayer,
        ttl: timedelta = DEFAULT_CACHE_TTL,
    ):
        if ttl <= timedelta(0):
            raise ValueError("cache ttl must be positive")
        self._store = store
        self._cache = cache
        self._ttl = ttl

    # ─── Reads ──────────────────────────────────────────────────

    async def get_all(self) -> list[CatalogItem]:
        cached = await self._read_cache(CATALOG_ALL_KEY)
        if cached is not None:
            try:
                items = decode_collection(CATALOG_ALL_KEY, cached)
                logger.debug("Catalog cache hit", extra={"cache_key": CATALOG_ALL_KEY})
                return items
            except CachePayloadError as e:
                self._log_payload_error(e)

        items = await self._store.get_all()
        if items:
            await self._write_cache(CATALOG_ALL_KEY, encode_collection(items))
        return items

    async def get_by_id(self, item_id: int) -> CatalogItem | None:
        key = catalog_item_key(item_id)
        cached = await self._read_cache(key)
        if cached is not None:
            try:
                item = decode_item(key, cached)
                logger.debug("Catalog cache hit", extra={"cache_key": key})
                return item
            except CachePayloadError as e:
                self._log_payload_error(e)

        item = await self._store.get_by_id(item_id)
        if item is not None:
            await self._write_cache(key, encode_item(item))
        return item

    async def exists(self, item_id: int) -> bool:
        return await self._store.exists(item_id)

    async def get_paginated(self, page_number: int, page_size: int) -> CatalogPage:
        offset = validate_page(page_number, page_size)
        items, total = await self._store.query_page(offset, page_size)
        return CatalogPage(
            items=items, page_number=page_number,
            page_size=page_size, total_count=total,
        )

    # ─── Writes ─────────────────────────────────────────────────

    async def add(self, item: CatalogItem) -> CatalogItem:
        """Persist a new item; the store assigns its id."""
        item = validate_catalog_item(item)
        created = await self._store.insert(item)
        logger.info(
            f"Catalog item {created.id} created", extra={"item_id": created.id},
        )
        await self._invalidate(CATALOG_ALL_KEY)
        return created

    async def update(self, item: CatalogItem) -> bool:
        """Full replace of an existing item. False when the id does not exist."""
        if item.id is None:
            raise ValidationError("id is required for update", "id")
        item = validate_catalog_item(item)
        updated = await self._store.update_full(item)
        if updated:
            logger.info(
                f"Catalog item {item.id} updated", extra={"item_id": item.id},
            )
        await self._invalidate(catalog_item_key(item.id), CATALOG_ALL_KEY)
        return updated

    async def delete(self, item_id: int) -> bool:
        """Set-based delete. False when nothing was deleted."""
        deleted = await self._store.delete_by_id(item_id)
        if deleted:
            logger.info(
                f"Catalog item {item_id} deleted", extra={"item_id": item_id},
            )
        await self._invalidate(catalog_item_key(item_id), CATALOG_ALL_KEY)
        return deleted

    # ─── Cache plumbing (fail-open) ─────────────────────────────

    async def _read_cache(self, key: str) -> str | None:
        try:
            value = await self._cache.get_string(key)
        except CacheUnavailableError as e:
            logger.warning(
                f"Cache read failed, falling back to store: {e.message}",
                extra={"cache_key": key, "error_code": e.code},
            )
            return None
        if not value:
            logger.debug("Catalog cache miss", extra={"cache_key": key})
            return None
        return value

    async def _write_cache(self, key: str, value: str) -> None:
        try:
            await self._cache.set_string(key, value, self._ttl)
        except CacheUnavailableError as e:
            logger.warning(
                f"Cache populate failed: {e.message}",
                extra={"cache_key": key, "error_code": e.code},
            )

    async def _invalidate(self, *keys: str) -> None:
        """Remove each key independently; one failure never blocks the next."""
        for key in keys:
            try:
                await self._cache.remove(key)
            except CacheUnavailableError as e:
                logger.warning(
                    f"Cache invalidation failed, entry expires at TTL: {e.message}",
                    extra={"cache_key": key, "error_code": e.code},
                )

    def _log_payload_error(self, e: CachePayloadError) -> None:
        logger.warning(
            f"Discarding cache entry: {e.message}",
            extra={"cache_key": e.key, "error_code": e.code},
        )
