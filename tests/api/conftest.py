"""API test fixtures — ASGI client with the process-wide db manager and cache patched.

Invariants:
    - Lifespan never runs (ASGITransport skips it): no real Postgres/Redis
    - database.db_manager points at the per-test SQLite engine
    - redis_cache.cache is a FakeRedisCache whose health is controllable
"""

import pytest
from httpx import ASGITransport, AsyncClient

import launchpad.infrastructure.database as db_module
import launchpad.infrastructure.redis_cache as cache_module
from launchpad.main import app

from tests.fakes import FakeCache


class FakeRedisCache(FakeCache):
    """FakeCache plus the readiness hook RedisCache exposes."""

    healthy = True

    async def health_check(self) -> bool:
        return self.healthy


@pytest.fixture
def app_cache(clock):
    return FakeRedisCache(clock)


@pytest.fixture
async def client(test_db_manager, app_cache, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", test_db_manager)
    monkeypatch.setattr(cache_module, "cache", app_cache)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

