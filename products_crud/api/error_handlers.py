"""Error Handlers: global exception handlers producing the {message, code} envelope.

Invariants:
    - ProductError -> status/code from core/error_mapping.py, wrapped domain message
    - RequestValidationError -> INVALID_REQUEST / 400 (binding, validation, path id)
    - Exception (catch-all) -> INTERNAL_SERVER_ERROR / 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from products_crud.core.domain_types import ResponseCode
from products_crud.core.error_mapping import (
    UNEXPECTED_ERROR_MESSAGE, ApiResponse,
    classify_request_errors, map_domain_error, map_request_error,
)
from products_crud.core.errors import ProductError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_product_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_product_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ProductError)
    async def product_error_handler(request: Request, exc: ProductError):
        """Handle all product domain/persistence errors."""
        body, status_code = map_domain_error(exc)
        log = logger.error if status_code >= 500 else logger.info
        log(
            f"ProductError: {exc.message}",
            extra={"error_code": body.code.value, "path": request.url.path},
        )
        return JSONResponse(status_code=status_code, content=body.to_dict())


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle binding, validation and path parameter errors."""
        error_type, message = classify_request_errors(
            exc.errors(), request.path_params.get("product_id"),
        )
        body, status_code = map_request_error(error_type, message)
        logger.warning(
            f"{error_type.value} on {request.url.path}: {message}",
            extra={"error_code": body.code.value, "path": request.url.path},
        )
        return JSONResponse(status_code=status_code, content=body.to_dict())


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        body = ApiResponse(
            message=UNEXPECTED_ERROR_MESSAGE,
            code=ResponseCode.INTERNAL_SERVER_ERROR,
        )
        return JSONResponse(status_code=500, content=body.to_dict())
