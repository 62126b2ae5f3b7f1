"""Error handlers — each failure category gets its status, envelope and log level.

Routes below are mounted on the real app for the duration of each test only; they
raise what the services raise so every branch of the handler is exercised.
"""

import logging

import pytest
from fastapi import APIRouter

from launchpad.core.errors import (
    CachePayloadError, CacheUnavailableError, ConcurrencyError, ErrorContext,
    StoreError, ValidationError,
)
from launchpad.main import app

router = APIRouter(prefix="/__errors__")


@router.get("/validation")
async def _raise_validation():
    raise ValidationError("Quantity must be between 1 and 100000.", "items[0].quantity")


@router.get("/conflict")
async def _raise_conflict():
    raise ConcurrencyError("Row was modified or deleted concurrently", ErrorContext(item_id=7))


@router.get("/store")
async def _raise_store():
    raise StoreError("Connection or operational error", "execute")


@router.get("/cache")
async def _raise_cache():
    raise CacheUnavailableError("refused", "get", "item:7")


@router.get("/payload")
async def _raise_payload():
    raise CachePayloadError("1 schema error(s)", "item:all")


@router.get("/boom")
async def _raise_unexpected():
    raise RuntimeError("secret internals")


@pytest.fixture(autouse=True)
def _mount_error_routes():
    before = list(app.router.routes)
    app.include_router(router)
    yield
    app.router.routes[:] = before


async def test_validation_error_names_the_field(client):
    res = await client.get("/__errors__/validation")
    assert res.status_code == 400
    body = res.json()["error"]
    assert body["code"] == "VALIDATION_ERROR"
    assert body["field"] == "items[0].quantity"
    assert "Retry-After" not in res.headers


async def test_concurrency_conflict_is_409_without_retry_hint(client):
    res = await client.get("/__errors__/conflict")
    assert res.status_code == 409
    body = res.json()["error"]
    assert body["code"] == "CONCURRENCY_CONFLICT"
    assert body["category"] == "conflict"
    assert body["context"]["item_id"] == 7
    assert "Retry-After" not in res.headers


@pytest.mark.parametrize("path, category", [
    ("/__errors__/store", "database"),
    ("/__errors__/cache", "cache"),
])
async def test_transient_outages_are_503_with_retry_after(client, path, category):
    res = await client.get(path)
    assert res.status_code == 503
    assert res.headers["Retry-After"] == "5"
    assert res.json()["error"]["category"] == category


async def test_corrupt_cache_payload_is_500(client):
    res = await client.get("/__errors__/payload")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "CACHE_PAYLOAD_INVALID"
    assert "Retry-After" not in res.headers


async def test_cache_warning_logged_with_context(client, caplog):
    with caplog.at_level(logging.WARNING, logger="launchpad.api.error_handlers"):
        await client.get("/__errors__/cache")
    record = _handler_records(caplog)[-1]
    assert record.levelno == logging.WARNING
    assert record.cache_key == "item:7"
    assert record.operation == "get"
    assert record.path == "/__errors__/cache"


async def test_store_failure_logged_as_error(client, caplog):
    with caplog.at_level(logging.WARNING, logger="launchpad.api.error_handlers"):
        await client.get("/__errors__/store")
    record = _handler_records(caplog)[-1]
    assert record.levelno == logging.ERROR
    assert record.error_code == "STORE_ERROR"
    assert record.operation == "execute"


async def test_unexpected_error_does_not_leak(client):
    res = await client.get("/__errors__/boom")
    assert res.status_code == 500
    assert "secret" not in res.text
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"


def _handler_records(caplog):
    return [r for r in caplog.records if r.name == "launchpad.api.error_handlers"]
