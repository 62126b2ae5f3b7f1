"""JSON log formatting — domain extras surface as top-level keys."""

import json
import logging

from launchpad.infrastructure.observability import JSONFormatter


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "launchpad.test", logging.WARNING, __file__, 1, msg, None, None,
    )
    record.__dict__.update(extra)
    return record


def test_extras_are_included():
    out = json.loads(JSONFormatter().format(
        _record("Cache read failed", cache_key="item:7", error_code="CACHE_UNAVAILABLE"),
    ))
    assert out["level"] == "WARNING"
    assert out["message"] == "Cache read failed"
    assert out["cache_key"] == "item:7"
    assert out["error_code"] == "CACHE_UNAVAILABLE"


def test_absent_extras_are_omitted():
    out = json.loads(JSONFormatter().format(_record("plain")))
    assert "item_id" not in out
    assert "order_id" not in out
