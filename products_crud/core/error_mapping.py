"""Error Mapping: turns request and domain failures into {message, code} + status.

Invariants:
    - Every request-level failure maps to INVALID_REQUEST / 400
    - Domain NOT_FOUND -> 404, NOTHING_TO_UPDATE -> 400, anything else -> 500
    - Binding (type) errors win over validation (missing field) errors
    - Path parameter errors win over body errors
    - Field names in messages are wire names (loc entries), never Python names

Design Decisions:
    - Operates on plain pydantic error dicts so the module stays framework-free
"""

from dataclasses import dataclass
from typing import Any, Sequence

from products_crud.core.domain_types import MAX_PRODUCT_ID, ErrorType, ResponseCode
from products_crud.core.errors import ProductError, ProductErrorKind

INVALID_ID_MESSAGE = "invalid id"
INVALID_JSON_MESSAGE = "unmarshal error, request body is not valid json"
UNEXPECTED_ERROR_MESSAGE = "an unexpected error occurred"

_DOMAIN_CODES: dict[ProductErrorKind, tuple[ResponseCode, int]] = {
    ProductErrorKind.NOT_FOUND: (ResponseCode.NOT_FOUND, 404),
    ProductErrorKind.NOTHING_TO_UPDATE: (ResponseCode.NOTHING_TO_UPDATE, 400),
}
_DEFAULT_DOMAIN_CODE = (ResponseCode.INTERNAL_SERVER_ERROR, 500)

_RANGE_ERROR_TYPES = frozenset({
    "greater_than", "greater_than_equal", "less_than", "less_than_equal",
})
_OBJECT_ERROR_TYPES = frozenset({
    "model_type", "model_attributes_type", "dict_type",
})


@dataclass(frozen=True)
class ApiResponse:
    """Error envelope returned by every endpoint on failure."""
    message: str
    code: ResponseCode

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message, "code": self.code.value}


# ─── Messages ───────────────────────────────────────────────────

def unmarshal_error_message(field: str, got: str, expected: str) -> str:
    return (
        f"unmarshal error data type, got: {got}, "
        f"expected: {expected} in {field} param"
    )


def validation_error_message(fields: Sequence[str]) -> str:
    return (
        "malformed request, please check the following parameters "
        f"in the request: [{', '.join(fields)}]"
    )


# ─── Mapping ────────────────────────────────────────────────────

def domain_error_code(err: ProductError) -> tuple[ResponseCode, int]:
    return _DOMAIN_CODES.get(err.kind, _DEFAULT_DOMAIN_CODE)


def map_domain_error(err: ProductError) -> tuple[ApiResponse, int]:
    code, status_code = domain_error_code(err)
    return ApiResponse(message=err.message, code=code), status_code


def map_request_error(
    error_type: ErrorType, message: str = "",
) -> tuple[ApiResponse, int]:
    """Map a request-level failure. Path errors always use the fixed message."""
    if error_type is ErrorType.INVALID_PATH_PARAM:
        message = INVALID_ID_MESSAGE
    return ApiResponse(message=message, code=ResponseCode.INVALID_REQUEST), 400


def is_valid_product_id(raw: str) -> bool:
    """True when raw is a plain decimal unsigned 64-bit integer."""
    if not (raw.isascii() and raw.isdigit()):
        return False
    return int(raw) <= MAX_PRODUCT_ID


def classify_request_errors(
    errors: Sequence[dict[str, Any]],
    raw_product_id: str | None = None,
) -> tuple[ErrorType, str]:
    """Reduce pydantic validation errors to one error type and message.

    raw_product_id is the undecoded path segment, if the route has one. It is
    checked here because a body that is not JSON is reported before path
    parameters are validated.
    """
    if any(_location(e) == "path" for e in errors):
        return ErrorType.INVALID_PATH_PARAM, INVALID_ID_MESSAGE
    if raw_product_id is not None and not is_valid_product_id(raw_product_id):
        return ErrorType.INVALID_PATH_PARAM, INVALID_ID_MESSAGE

    if any(e["type"] == "json_invalid" for e in errors):
        return ErrorType.UNMARSHALL, INVALID_JSON_MESSAGE

    type_errors = [e for e in errors if not _is_missing(e)]
    if type_errors:
        first = type_errors[0]
        return ErrorType.UNMARSHALL, unmarshal_error_message(
            _field_name(first), _got_kind(first), _expected_kind(first["type"]),
        )

    return ErrorType.VALIDATION, validation_error_message(
        [_field_name(e) for e in errors],
    )


# ─── Helpers ────────────────────────────────────────────────────

def _location(error: dict[str, Any]) -> str:
    loc = tuple(error.get("loc", ()))
    return str(loc[0]) if loc else ""


def _field_name(error: dict[str, Any]) -> str:
    loc = tuple(error.get("loc", ()))
    return str(loc[-1]) if len(loc) > 1 else "body"


def _is_missing(error: dict[str, Any]) -> bool:
    # null for a required field is treated like an absent field
    return error["type"] == "missing" or (
        error.get("input") is None and len(tuple(error.get("loc", ()))) > 1
    )


def _json_kind(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "null"


def _got_kind(error: dict[str, Any]) -> str:
    value = error.get("input")
    if error["type"] in _RANGE_ERROR_TYPES:
        return f"number {value}"
    if error["type"].startswith("int") and isinstance(value, float):
        return f"number {value}"
    return _json_kind(value)


def _expected_kind(error_type: str) -> str:
    if error_type in _RANGE_ERROR_TYPES:
        return "number"
    if error_type in _OBJECT_ERROR_TYPES:
        return "object"
    prefix = error_type.split("_", 1)[0]
    if prefix in ("int", "float", "decimal"):
        return "number"
    if prefix == "bool":
        return "bool"
    if prefix == "string":
        return "string"
    return "valid value"
