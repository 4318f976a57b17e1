"""Product ORM: row mapping of the products table.

Invariants:
    - id is an auto-assigned integer primary key, immutable once stored
    - Every column is non-nullable; discontinued defaults to false
    - Only repositories/ touches this class; it never leaves the persistence layer
"""

from sqlalchemy import BigInteger, Boolean, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from products_crud.db.base import Base

# SQLite only auto-increments INTEGER PRIMARY KEY columns
_ID_TYPE = BigInteger().with_variant(Integer(), "sqlite")


class ProductModel(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(_ID_TYPE, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    supplier_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    category_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    stock: Mapped[int] = mapped_column(BigInteger, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    discontinued: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    def __repr__(self) -> str:
        return f"ProductModel(id={self.id!r}, name={self.name!r})"
