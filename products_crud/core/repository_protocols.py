"""Boundary Protocols: contract between the product services and persistence.

Invariants:
    - Services depend on ProductRepository, never on SQLAlchemy directly
    - Every method either succeeds or raises ProductError with a single kind
    - get_by_id raises NOT_FOUND only when the store returned zero rows

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no base class
    - Async methods: implementations do IO
"""

from typing import Protocol

from products_crud.core.domain_types import ProductId
from products_crud.core.product import ProductRecord


class ProductRepository(Protocol):
    """Contract for product persistence, implemented in repositories/."""
    async def save(self, record: ProductRecord) -> None: ...
    async def get_all(self) -> list[ProductRecord]: ...
    async def get_by_id(self, product_id: ProductId) -> ProductRecord: ...
    async def update(
        self, product_id: ProductId, record: ProductRecord,
    ) -> ProductRecord: ...
    async def delete(self, product_id: ProductId) -> None: ...
