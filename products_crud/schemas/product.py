"""Product Schemas: Pydantic models for the /api/v1/products wire contract.

Invariants:
    - Wire names are camelCase (supplierId, categoryId); Python names are snake_case
    - Request models are strict: "1" is not accepted where a number is expected
    - Unsigned fields reject negative values and values past a signed BIGINT
    - ProductUpdateRequest tracks explicit presence: only keys sent with a
      non-null value become part of the change-set
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from products_crud.core.domain_types import MAX_STORED_INT
from products_crud.core.product import Product, ProductChanges, new_product_without_id

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductRequest(BaseModel):
    """Create payload. Every field except discontinued is required."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, strict=True,
    )

    name: str
    supplier_id: int = Field(ge=0, le=MAX_STORED_INT)
    category_id: int = Field(ge=0, le=MAX_STORED_INT)
    stock: int = Field(ge=0, le=MAX_STORED_INT)
    price: float
    discontinued: bool = False

    def to_product(self) -> Product:
        return new_product_without_id(
            name=self.name,
            supplier_id=self.supplier_id,
            category_id=self.category_id,
            stock=self.stock,
            price=self.price,
            discontinued=self.discontinued,
        )


class ProductUpdateRequest(BaseModel):
    """Update payload. Every field is optional."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, strict=True,
    )

    name: str | None = None
    supplier_id: int | None = Field(None, ge=0, le=MAX_STORED_INT)
    category_id: int | None = Field(None, ge=0, le=MAX_STORED_INT)
    stock: int | None = Field(None, ge=0, le=MAX_STORED_INT)
    price: float | None = None
    discontinued: bool | None = None

    def to_changes(self) -> ProductChanges:
        sent = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }
        return ProductChanges(**sent)


class ProductResponse(BaseModel):
    """Product as returned to clients."""
    model_config = _WIRE_CONFIG

    id: int
    name: str
    supplier_id: int
    category_id: int
    stock: int
    price: float
    discontinued: bool

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            supplier_id=product.supplier_id,
            category_id=product.category_id,
            stock=product.stock,
            price=product.price,
            discontinued=product.discontinued,
        )


class ApiErrorResponse(BaseModel):
    """Error envelope: {message, code}. Documented on every route."""
    message: str
    code: str
