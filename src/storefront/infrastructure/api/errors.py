"""Translate domain exceptions into JSON error envelopes."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    PersistenceConflict,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
    )


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    if exc.violations:
        return _error(400, "Validation failed", errors=exc.violations)
    return _error(400, str(exc))


async def _insufficient_stock(request: Request, exc: InsufficientStockError) -> JSONResponse:
    return _error(400, str(exc))


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _error(404, str(exc))


async def _conflict(request: Request, exc: PersistenceConflict) -> JSONResponse:
    return _error(409, "Order could not be created, please retry", retryable=True)


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InsufficientStockError, _insufficient_stock)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(PersistenceConflict, _conflict)
    app.add_exception_handler(Exception, _unexpected)
