"""Redis Cache — CacheLayer implementation over redis.asyncio.

Invariants:
    - Every entry is written with an absolute expiry (SET ... PX ttl)
    - Any RedisError is re-raised as CacheUnavailableError — callers decide fail-open
    - No retries here: a failed command fails fast, the store is the fallback
    - Values are str (decode_responses=True)

Design Decisions:
    - Explicitly constructed and injected, never imported as a global by the core
      (ADR: tests substitute an in-memory fake with a controllable clock)
    - Short socket timeouts: a slow cache must not stall reads that could hit the store
"""

import logging
from datetime import timedelta

import redis.asyncio as redis
from redis.exceptions import RedisError

from launchpad.core.errors import CacheUnavailableError

logger = logging.getLogger(__name__)


class RedisCache:
    """Distributed string cache with per-entry TTL."""

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(
        cls, url: str, socket_timeout_seconds: float = 0.5,
    ) -> "RedisCache":
        client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout_seconds,
            socket_connect_timeout=socket_timeout_seconds,
        )
        return cls(client)

    async def get_string(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise CacheUnavailableError(str(e), "get", key) from e

    async def set_string(self, key: str, value: str, ttl: timedelta) -> None:
        ttl_ms = int(ttl.total_seconds() * 1000)
        if ttl_ms <= 0:
            raise ValueError("ttl must be positive")
        try:
            await self._client.set(key, value, px=ttl_ms)
        except RedisError as e:
            raise CacheUnavailableError(str(e), "set", key) from e

    async def remove(self, key: str) -> None:
        try:
            await self._client.delete(key)
        except RedisError as e:
            raise CacheUnavailableError(str(e), "remove", key) from e

    async def health_check(self) -> bool:
        """Ping the cache (for readiness probes)."""
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning(f"Cache health check failed: {e}")
            return False

    async def close(self) -> None:
        await self._client.aclose()


# Singleton (initialized on startup)
cache: RedisCache | None = None


def init_cache(url: str, **kwargs) -> RedisCache:
    global cache
    cache = RedisCache.from_url(url, **kwargs)
    return cache


async def close_cache() -> None:
    global cache
    if cache:
        await cache.close()
    cache = None
