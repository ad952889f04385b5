"""Translate domain and framework errors into ``{success, message}`` bodies."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.errors import AuthenticationError, PersistenceError, RevenueError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Server error"


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RevenueError)
    async def revenue_error_handler(request: Request, exc: RevenueError) -> JSONResponse:
        if isinstance(exc, PersistenceError):
            logger.error(
                "Persistence failure on %s %s: %s",
                request.method, request.url.path, exc.message,
                exc_info=exc,
            )
            return _error_response(exc.status_code, GENERIC_ERROR)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return _error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if not errors:
            return _error_response(400, "Invalid request")
        first = errors[0]
        field = first.get("loc", ("request",))[-1]
        return _error_response(400, f"{field}: {first.get('msg', 'invalid value')}")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return _error_response(500, GENERIC_ERROR)
