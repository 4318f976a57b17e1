"""Product Schemas: strict binding, camelCase aliases and explicit presence.

Invariants:
    - Strings are never coerced into numbers
    - Update requests only carry keys that were sent with a non-null value
"""

import pytest
from pydantic import ValidationError

from products_crud.schemas.product import (
    ProductRequest, ProductResponse, ProductUpdateRequest,
)
from products_crud.core.product import ProductChanges, new_product


def test_request_reads_camel_case_keys():
    req = ProductRequest.model_validate({
        "name": "Mouse", "supplierId": 3, "categoryId": 4, "stock": 0, "price": 9.5,
    })
    product = req.to_product()
    assert product.id == 0
    assert (product.supplier_id, product.category_id, product.stock) == (3, 4, 0)
    assert product.discontinued is False


def test_request_rejects_numeric_string():
    with pytest.raises(ValidationError) as exc_info:
        ProductRequest.model_validate({
            "name": "Mouse", "supplierId": "3", "categoryId": 4, "stock": 1, "price": 9.5,
        })
    assert exc_info.value.errors()[0]["loc"] == ("supplierId",)


def test_update_request_tracks_explicit_presence():
    req = ProductUpdateRequest.model_validate({"discontinued": False, "stock": 0})
    assert req.to_changes() == ProductChanges(stock=0, discontinued=False)


def test_update_request_treats_null_as_absent():
    req = ProductUpdateRequest.model_validate({"name": None, "price": 1.5})
    assert req.to_changes() == ProductChanges(price=1.5)


def test_response_serializes_with_aliases():
    product = new_product(7, "Mouse", 3, 4, 1, 9.5, True)
    dumped = ProductResponse.from_product(product).model_dump(by_alias=True)
    assert dumped == {
        "id": 7, "name": "Mouse", "supplierId": 3, "categoryId": 4,
        "stock": 1, "price": 9.5, "discontinued": True,
    }
