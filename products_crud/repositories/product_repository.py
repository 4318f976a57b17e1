"""Product Repository: SQLAlchemy implementation of the ProductRepository protocol.

Invariants:
    - One round trip per call (plus commit); no retries
    - SQLAlchemyError is logged here with detail, rolled back, and re-raised as a
      ProductError kind: no driver text reaches the caller
    - get_by_id signals NOT_FOUND only for "zero rows returned"
    - get_all orders by id so listing order is stable
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from products_crud.core.domain_types import ProductId
from products_crud.core.errors import ProductError, ProductErrorKind
from products_crud.core.product import ProductRecord
from products_crud.models.product import ProductModel

logger = logging.getLogger(__name__)


def _to_record(row: ProductModel) -> ProductRecord:
    return ProductRecord(
        id=ProductId(row.id),
        name=row.name,
        supplier_id=row.supplier_id,
        category_id=row.category_id,
        stock=row.stock,
        price=row.price,
        discontinued=row.discontinued,
    )


def _apply_record(row: ProductModel, record: ProductRecord) -> None:
    row.name = record.name
    row.supplier_id = record.supplier_id
    row.category_id = record.category_id
    row.stock = record.stock
    row.price = record.price
    row.discontinued = record.discontinued


class SqlAlchemyProductRepository:
    """Product persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, record: ProductRecord) -> None:
        row = ProductModel()
        _apply_record(row, record)
        try:
            self.db.add(row)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"could not insert product: {e}")
            raise ProductError(ProductErrorKind.SAVE_FAILED) from e
        logger.info("Product saved", extra={"product_id": row.id})

    async def get_all(self) -> list[ProductRecord]:
        try:
            result = await self.db.execute(
                select(ProductModel).order_by(ProductModel.id),
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"could not retrieve products: {e}")
            raise ProductError(ProductErrorKind.RETRIEVE_MANY_FAILED) from e
        return [_to_record(row) for row in rows]

    async def get_by_id(self, product_id: ProductId) -> ProductRecord:
        try:
            result = await self.db.execute(
                select(ProductModel).where(ProductModel.id == product_id),
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                f"could not retrieve product: {e}",
                extra={"product_id": product_id},
            )
            raise ProductError(ProductErrorKind.RETRIEVE_ONE_FAILED) from e
        if row is None:
            raise ProductError(ProductErrorKind.NOT_FOUND)
        return _to_record(row)

    async def update(
        self, product_id: ProductId, record: ProductRecord,
    ) -> ProductRecord:
        try:
            row = await self.db.get(ProductModel, product_id)
            if row is None:
                raise ProductError(ProductErrorKind.NOT_FOUND)
            _apply_record(row, record)
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"could not update product: {e}",
                extra={"product_id": product_id},
            )
            raise ProductError(ProductErrorKind.UPDATE_FAILED) from e
        return _to_record(row)

    async def delete(self, product_id: ProductId) -> None:
        try:
            row = await self.db.get(ProductModel, product_id)
            if row is None:
                raise ProductError(ProductErrorKind.NOT_FOUND)
            await self.db.delete(row)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"could not delete product: {e}",
                extra={"product_id": product_id},
            )
            raise ProductError(ProductErrorKind.DELETE_FAILED) from e
        logger.info("Product deleted", extra={"product_id": product_id})
