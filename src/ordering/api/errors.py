"""Translate ordering errors into JSON responses.

Body shape: ``{"error": {"code": ..., "message": ..., **context}}``. Protean's
own exceptions keep the mapping from ``register_exception_handlers``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from ordering.errors import (
    EmptyCartError,
    InsufficientStockError,
    InvalidQuantityError,
    LineNotFoundError,
    OrderingError,
    OrderNotFoundError,
    ProductNotFoundError,
    ProductOwnershipError,
    SequencerUnavailableError,
    UnauthorizedError,
)

logger = structlog.get_logger(__name__)

STATUS_CODES = {
    InvalidQuantityError: 400,
    EmptyCartError: 400,
    ProductNotFoundError: 404,
    LineNotFoundError: 404,
    OrderNotFoundError: 404,
    UnauthorizedError: 403,
    ProductOwnershipError: 403,
    InsufficientStockError: 409,
    SequencerUnavailableError: 503,
}


def status_code_for(exc: OrderingError) -> int:
    for error_cls, status_code in STATUS_CODES.items():
        if isinstance(exc, error_cls):
            return status_code
    return 400


def error_response(exc: OrderingError) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(exc), content={"error": exc.to_dict()})


async def handle_ordering_error(request: Request, exc: OrderingError) -> JSONResponse:
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log("api.request_rejected", path=request.url.path, code=exc.code, status_code=status_code)
    return error_response(exc)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed quantities get the same 400 as non-positive ones."""
    for error in exc.errors():
        if error.get("loc", ())[-1:] == ("quantity",):
            return error_response(InvalidQuantityError(error.get("input")))
    return await request_validation_exception_handler(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(OrderingError, handle_ordering_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
