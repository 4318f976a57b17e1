"""Structured Logging: JSON formatter fields and the per-request access log."""

import json
import logging

from products_crud.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "products_crud.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "products_crud.test"
    assert payload["message"] == "hello world"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(error_code="NOT_FOUND", product_id=7, secret="x"),
    ))
    assert payload["error_code"] == "NOT_FOUND"
    assert payload["product_id"] == 7
    assert "secret" not in payload


async def test_access_log_line_per_request(client, caplog):
    with caplog.at_level(logging.INFO, logger="products_crud.access"):
        await client.get("/api/v1/products")
    access = [r for r in caplog.records if r.name == "products_crud.access"]
    assert len(access) == 1
    assert access[0].method == "GET"
    assert access[0].path == "/api/v1/products"
    assert access[0].status_code == 200
