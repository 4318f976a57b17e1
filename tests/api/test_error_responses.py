"""Error Responses: 500-class mapping through the HTTP layer.

Tests cover:
    - Persistence failures become INTERNAL_SERVER_ERROR with the wrapped message
    - Unexpected exceptions never leak their text
    - Invalid ids never reach the service
"""

import pytest
from httpx import ASGITransport, AsyncClient

from products_crud.api.routes.products import get_product_service
from products_crud.core.errors import ProductError, ProductErrorKind
from products_crud.main import app


class _FailingService:
    def __init__(self):
        self.calls = 0

    async def create_product(self, product):
        self.calls += 1
        raise ProductError(ProductErrorKind.SAVE_FAILED).wrap("persistence failed")

    async def get_products(self):
        self.calls += 1
        raise ProductError(ProductErrorKind.RETRIEVE_MANY_FAILED).wrap("failed getting")

    async def get_product_by_id(self, product_id):
        self.calls += 1
        raise RuntimeError("password=hunter2 connection refused")


@pytest.fixture
async def failing_client():
    service = _FailingService()
    app.dependency_overrides[get_product_service] = lambda: service
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c, service
    app.dependency_overrides.clear()


async def test_save_failure_is_500(failing_client):
    client, _ = failing_client
    res = await client.post("/api/v1/products", json={
        "name": "Macbook 2021", "supplierId": 1, "categoryId": 1,
        "stock": 50, "price": 3200.56,
    })
    assert res.status_code == 500
    assert res.json() == {
        "message": "persistence failed: product could not be saved",
        "code": "INTERNAL_SERVER_ERROR",
    }


async def test_retrieve_failure_is_500(failing_client):
    client, _ = failing_client
    res = await client.get("/api/v1/products")
    assert res.status_code == 500
    assert res.json() == {
        "message": "failed getting: products could not be retrieved",
        "code": "INTERNAL_SERVER_ERROR",
    }


async def test_unexpected_error_does_not_leak(failing_client):
    client, _ = failing_client
    res = await client.get("/api/v1/products/1")
    assert res.status_code == 500
    assert res.json() == {
        "message": "an unexpected error occurred",
        "code": "INTERNAL_SERVER_ERROR",
    }
    assert "hunter2" not in res.text


async def test_invalid_id_never_calls_service(failing_client):
    client, service = failing_client
    res = await client.get("/api/v1/products/not-a-number")
    assert res.status_code == 400
    assert service.calls == 0
