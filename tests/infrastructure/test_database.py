"""Tests for DatabaseSessionManager — SQLAlchemy failures surface as StoreError."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from launchpad.core.errors import ConcurrencyError, StoreError


async def test_health_check_true_for_live_engine(test_db_manager):
    assert await test_db_manager.health_check() is True


async def test_operational_error_mapped(test_db_manager):
    with pytest.raises(StoreError) as exc:
        async with test_db_manager.session() as session:
            await session.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.http_status == 503


@pytest.mark.parametrize(
    "raised, expected_operation",
    [
        (IntegrityError("INSERT", {}, Exception("unique")), "commit"),
        (OperationalError("SELECT", {}, Exception("gone")), "execute"),
    ],
)
async def test_sqlalchemy_errors_mapped(test_db_manager, raised, expected_operation):
    with pytest.raises(StoreError) as exc:
        async with test_db_manager.session():
            raise raised
    assert exc.value.operation == expected_operation


async def test_stale_data_is_a_concurrency_conflict(test_db_manager):
    with pytest.raises(ConcurrencyError) as exc:
        async with test_db_manager.session():
            raise StaleDataError("row changed")
    assert exc.value.http_status == 409


async def test_other_exceptions_pass_through(test_db_manager):
    with pytest.raises(KeyError):
        async with test_db_manager.session():
            raise KeyError("not a db problem")
