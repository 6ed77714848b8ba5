from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tableorder.api.middleware.request_id import get_request_id
from tableorder.application.use_cases.create_order import MenuItemNotFoundError
from tableorder.application.use_cases.get_order import OrderNotFoundError

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


def _database_exception_handler(status_code: int, code: str, message: str):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "database_failure",
            exc_info=exc,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "error_code": code,
            },
        )
        return _error_response(status_code=status_code, code=code, message=message)

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": jsonable_encoder(validation_exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
    ]
    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    database_mappings: list[tuple[type[Exception], int, str, str]] = [
        (
            PoolTimeoutError,
            503,
            "CONNECTION_EXHAUSTED",
            "no database connection available, please try again later",
        ),
        (
            OperationalError,
            503,
            "DATABASE_UNAVAILABLE",
            "database is unavailable, please try again later",
        ),
        (
            SQLAlchemyError,
            500,
            "DATABASE_ERROR",
            "An unknown server error has occurred, please try again later.",
        ),
    ]
    for exc_cls, status_code, code, message in database_mappings:
        app.add_exception_handler(
            exc_cls, _database_exception_handler(status_code, code, message)
        )

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
