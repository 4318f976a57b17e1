"""Product Service: use-case orchestration between routes and the repository.

Invariants:
    - Every repository failure is re-raised with a stage label and its kind intact
    - update_product and delete_product propagate the lookup error un-wrapped
      (NOT_FOUND stays "product could not be found")
    - diff happens before the update call: a no-op update never reaches the store
    - No retries; the caller sees the first failure
"""

import logging

from products_crud.core.domain_types import ProductId
from products_crud.core.errors import ProductError
from products_crud.core.product import (
    Product, ProductChanges, diff_product, from_record, to_record,
)
from products_crud.core.repository_protocols import ProductRepository
from products_crud.schemas.product import ProductResponse

logger = logging.getLogger(__name__)

STAGE_PERSISTENCE = "persistence failed"
STAGE_GETTING = "failed getting"
STAGE_NOT_NECESSARY = "update not necessary"
STAGE_UPDATE = "update failed"
STAGE_DELETE = "delete failed"


class ProductService:
    """Product use cases."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def create_product(self, product: Product) -> None:
        try:
            await self.repository.save(to_record(product))
        except ProductError as e:
            raise e.wrap(STAGE_PERSISTENCE) from e

    async def get_products(self) -> list[ProductResponse]:
        try:
            records = await self.repository.get_all()
        except ProductError as e:
            raise e.wrap(STAGE_GETTING) from e
        return [ProductResponse.from_product(from_record(r)) for r in records]

    async def get_product_by_id(self, product_id: ProductId) -> ProductResponse:
        try:
            record = await self.repository.get_by_id(product_id)
        except ProductError as e:
            raise e.wrap(STAGE_GETTING) from e
        return ProductResponse.from_product(from_record(record))

    async def update_product(
        self, product_id: ProductId, changes: ProductChanges,
    ) -> ProductResponse:
        """Fetch, diff, then persist only when something actually changed."""
        current = from_record(await self.repository.get_by_id(product_id))

        try:
            merged = diff_product(current, changes)
        except ProductError as e:
            logger.info(
                "Update skipped, no changes", extra={"product_id": product_id},
            )
            raise e.wrap(STAGE_NOT_NECESSARY) from e

        try:
            record = await self.repository.update(product_id, to_record(merged))
        except ProductError as e:
            raise e.wrap(STAGE_UPDATE) from e
        return ProductResponse.from_product(from_record(record))

    async def delete_product(self, product_id: ProductId) -> None:
        await self.repository.get_by_id(product_id)
        try:
            await self.repository.delete(product_id)
        except ProductError as e:
            raise e.wrap(STAGE_DELETE) from e
