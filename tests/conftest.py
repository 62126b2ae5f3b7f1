"""Root conftest — shared test configuration and database/cache fixtures.

Invariants:
    - Every test that touches SQL gets a fresh in-memory SQLite database
    - The cache is always the in-memory FakeCache (tests never need Redis)

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency; Postgres-specific
      features are not exercised by the stores
"""

import os

# Ensure tests never reach real infrastructure
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("REDIS_URL", "redis://localhost:6399/15")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from launchpad.db.base import Base  # noqa: E402
from launchpad.infrastructure.catalog_store import SqlCatalogStore  # noqa: E402
from launchpad.infrastructure.database import DatabaseSessionManager  # noqa: E402
from launchpad.infrastructure.order_store import SqlOrderStore  # noqa: E402
import launchpad.models  # noqa: E402,F401

from tests.fakes import FakeCache, ManualClock  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def catalog_store(test_db_manager):
    return SqlCatalogStore(test_db_manager)


@pytest.fixture
def order_store(test_db_manager):
    return SqlOrderStore(test_db_manager)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def fake_cache(clock):
    return FakeCache(clock)
