"""Product Entity & Update Diff: immutable domain value types and change merging.

Invariants:
    - Product and ProductRecord are frozen: no field changes after construction
    - id == 0 means "not yet persisted"; the store assigns the real id
    - to_record/from_record are identity-preserving on every field
    - diff_product raises NOTHING_TO_UPDATE before any persistence happens
    - ProductChanges uses None for "not provided"; 0 and False are real values

Design Decisions:
    - ProductRecord is a separate type from Product even though the fields match,
      so the persistence shape can change without leaking into business logic
    - Pure module: no IO, no async, no ORM imports
"""

from dataclasses import dataclass, fields, replace

from products_crud.core.domain_types import ProductId
from products_crud.core.errors import ProductError, ProductErrorKind

UNSAVED_ID = ProductId(0)


@dataclass(frozen=True)
class Product:
    """In-flight business representation of a product."""
    id: ProductId
    name: str
    supplier_id: int
    category_id: int
    stock: int
    price: float
    discontinued: bool


@dataclass(frozen=True)
class ProductRecord:
    """Persistence-facing representation of a product."""
    id: ProductId
    name: str
    supplier_id: int
    category_id: int
    stock: int
    price: float
    discontinued: bool


@dataclass(frozen=True)
class ProductChanges:
    """Change-set for an update. Unset fields are None."""
    name: str | None = None
    supplier_id: int | None = None
    category_id: int | None = None
    stock: int | None = None
    price: float | None = None
    discontinued: bool | None = None

    def provided(self) -> dict[str, object]:
        """Fields the caller actually supplied, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def new_product(
    id: int,
    name: str,
    supplier_id: int,
    category_id: int,
    stock: int,
    price: float,
    discontinued: bool = False,
) -> Product:
    return Product(
        id=ProductId(id), name=name, supplier_id=supplier_id,
        category_id=category_id, stock=stock, price=price,
        discontinued=discontinued,
    )


def new_product_without_id(
    name: str,
    supplier_id: int,
    category_id: int,
    stock: int,
    price: float,
    discontinued: bool = False,
) -> Product:
    """Build a product that has not been persisted yet (id is 0)."""
    return new_product(
        UNSAVED_ID, name, supplier_id, category_id, stock, price, discontinued,
    )


def to_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=product.id,
        name=product.name,
        supplier_id=product.supplier_id,
        category_id=product.category_id,
        stock=product.stock,
        price=product.price,
        discontinued=product.discontinued,
    )


def from_record(record: ProductRecord) -> Product:
    return Product(
        id=record.id,
        name=record.name,
        supplier_id=record.supplier_id,
        category_id=record.category_id,
        stock=record.stock,
        price=record.price,
        discontinued=record.discontinued,
    )


def diff_product(current: Product, changes: ProductChanges) -> Product:
    """Merge `changes` into `current`, keeping only values that differ.

    Raises ProductError(NOTHING_TO_UPDATE) when no provided field differs
    from the stored value, including when nothing was provided at all.
    """
    changed = {
        name: value
        for name, value in changes.provided().items()
        if getattr(current, name) != value
    }
    if not changed:
        raise ProductError(ProductErrorKind.NOTHING_TO_UPDATE)
    return replace(current, **changed)
