"""Product Routes: HTTP surface for the product CRUD use cases.

Invariants:
    - Path ids are unsigned 64-bit integers; anything else is "invalid id" (400)
    - Bodies are bound and validated by Pydantic before reaching the handler
    - Routes never contain business logic: they convert and delegate to ProductService
    - Failures surface as exceptions handled in api/error_handlers.py
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from products_crud.core.domain_types import MAX_PRODUCT_ID, ProductId
from products_crud.infrastructure.database import get_db
from products_crud.repositories.product_repository import SqlAlchemyProductRepository
from products_crud.schemas.product import (
    ApiErrorResponse, ProductRequest, ProductResponse, ProductUpdateRequest,
)
from products_crud.services.product_service import ProductService

router = APIRouter(
    prefix="/api/v1/products",
    tags=["products"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ApiErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ApiErrorResponse},
    },
)

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ApiErrorResponse}}


def get_product_service(db: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(SqlAlchemyProductRepository(db))


ProductIdPath = Annotated[int, Path(ge=0, le=MAX_PRODUCT_ID)]


@router.post("", status_code=status.HTTP_204_NO_CONTENT)
async def create_product(
    body: ProductRequest,
    service: ProductService = Depends(get_product_service),
):
    """Create a new product."""
    await service.create_product(body.to_product())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=list[ProductResponse])
async def list_products(
    service: ProductService = Depends(get_product_service),
):
    """List every product ordered by id."""
    return await service.get_products()


@router.get("/{product_id}", response_model=ProductResponse, responses=_NOT_FOUND)
async def get_product(
    product_id: ProductIdPath,
    service: ProductService = Depends(get_product_service),
):
    return await service.get_product_by_id(ProductId(product_id))


@router.put("/{product_id}", response_model=ProductResponse, responses=_NOT_FOUND)
async def update_product(
    body: ProductUpdateRequest,
    product_id: ProductIdPath,
    service: ProductService = Depends(get_product_service),
):
    """Apply the fields present in the body; 400 when nothing would change."""
    return await service.update_product(ProductId(product_id), body.to_changes())


@router.delete(
    "/{product_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_NOT_FOUND,
)
async def delete_product(
    product_id: ProductIdPath,
    service: ProductService = Depends(get_product_service),
):
    await service.delete_product(ProductId(product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
