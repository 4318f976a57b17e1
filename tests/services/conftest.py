"""Service test fixtures: in-memory fake of the ProductRepository protocol.

Invariants:
    - FakeProductRepository records every call in `calls` as (method, args)
    - failures[method] = ProductErrorKind makes that method raise the kind
"""

import pytest

from products_crud.core.domain_types import ProductId
from products_crud.core.errors import ProductError, ProductErrorKind
from products_crud.core.product import ProductRecord


class FakeProductRepository:
    def __init__(self, records=None):
        self.records: dict[int, ProductRecord] = {r.id: r for r in records or []}
        self.calls: list[tuple[str, tuple]] = []
        self.failures: dict[str, ProductErrorKind] = {}

    def _enter(self, method: str, *args) -> None:
        self.calls.append((method, args))
        if method in self.failures:
            raise ProductError(self.failures[method])

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    async def save(self, record: ProductRecord) -> None:
        self._enter("save", record)
        new_id = ProductId(max(self.records, default=0) + 1)
        self.records[new_id] = ProductRecord(**{**record.__dict__, "id": new_id})

    async def get_all(self) -> list[ProductRecord]:
        self._enter("get_all")
        return [self.records[k] for k in sorted(self.records)]

    async def get_by_id(self, product_id: ProductId) -> ProductRecord:
        self._enter("get_by_id", product_id)
        if product_id not in self.records:
            raise ProductError(ProductErrorKind.NOT_FOUND)
        return self.records[product_id]

    async def update(self, product_id: ProductId, record: ProductRecord) -> ProductRecord:
        self._enter("update", product_id, record)
        self.records[product_id] = record
        return record

    async def delete(self, product_id: ProductId) -> None:
        self._enter("delete", product_id)
        del self.records[product_id]


@pytest.fixture
def stored_record():
    return ProductRecord(
        id=ProductId(1), name="Macbook 2021", supplier_id=1, category_id=1,
        stock=50, price=3200.56, discontinued=False,
    )


@pytest.fixture
def fake_repository(stored_record):
    return FakeProductRepository([stored_record])
