"""Test doubles — in-memory cache with a manual clock, plus failure injection.

Invariants:
    - FakeCache honours TTL exactly: an entry is visible while now < expires_at
    - Time only moves when a test calls ManualClock.advance()
    - fail_ops makes the named operations raise CacheUnavailableError
    - events records every call in order, shared with RecordingCatalogStore so tests
      can assert store-write-before-invalidation ordering
"""

from datetime import datetime, timedelta, timezone

from launchpad.core.catalog import CatalogItem
from launchpad.core.errors import CacheUnavailableError


class ManualClock:
    """Deterministic clock for TTL tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeCache:
    """CacheLayer implementation backed by a dict."""

    def __init__(self, clock: ManualClock, events: list | None = None):
        self._clock = clock
        self._entries: dict[str, tuple[str, datetime]] = {}
        self.fail_ops: set[str] = set()
        self.events = events if events is not None else []

    def _maybe_fail(self, op: str, key: str) -> None:
        if op in self.fail_ops:
            self.events.append(("cache_fail", op, key))
            raise CacheUnavailableError("connection refused", op, key)

    async def get_string(self, key: str) -> str | None:
        self._maybe_fail("get", key)
        self.events.append(("cache_get", key))
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set_string(self, key: str, value: str, ttl: timedelta) -> None:
        self._maybe_fail("set", key)
        self.events.append(("cache_set", key))
        self._entries[key] = (value, self._clock() + ttl)

    async def remove(self, key: str) -> None:
        self._maybe_fail("remove", key)
        self.events.append(("cache_remove", key))
        self._entries.pop(key, None)

    # ── test helpers ──

    def contains(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() < entry[1]

    def raw(self, key: str) -> str | None:
        entry = self._entries.get(key)
        return entry[0] if entry else None

    def expires_at(self, key: str) -> datetime | None:
        entry = self._entries.get(key)
        return entry[1] if entry else None

    def put_raw(self, key: str, value: str, ttl: timedelta = timedelta(minutes=5)) -> None:
        self._entries[key] = (value, self._clock() + ttl)


class RecordingCatalogStore:
    """Wraps a CatalogStore and appends write events to a shared log."""

    def __init__(self, inner, events: list):
        self._inner = inner
        self.events = events

    def __getattr__(self, name):
        return getattr(self._inner, name)

    async def insert(self, item: CatalogItem) -> CatalogItem:
        created = await self._inner.insert(item)
        self.events.append(("store_insert", created.id))
        return created

    async def update_full(self, item: CatalogItem) -> bool:
        result = await self._inner.update_full(item)
        self.events.append(("store_update", item.id))
        return result

    async def delete_by_id(self, item_id: int) -> bool:
        result = await self._inner.delete_by_id(item_id)
        self.events.append(("store_delete", item_id))
        return result
