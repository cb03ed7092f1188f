"""
Error taxonomy and FastAPI exception handlers.

Every error response carries the same body, ``{"message": "<short text>"}``.
Storage and unexpected failures are logged with a traceback and reported to
the client as a fixed "Server error" message.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("neighbor_alert.errors")

SERVER_ERROR_MESSAGE = "Server error"


class NeighborAlertError(Exception):
    """Base exception for errors that map onto an HTTP status."""

    status_code = 500
    default_message = SERVER_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(NeighborAlertError):
    status_code = 400
    default_message = "Invalid data"


class Forbidden(NeighborAlertError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(NeighborAlertError):
    status_code = 404
    default_message = "Not found"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_error_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(NeighborAlertError)
    async def handle_domain_error(request: Request, exc: NeighborAlertError):
        logger.info(
            "%s %s rejected: %s (%d)",
            request.method, request.url.path, exc.message, exc.status_code,
        )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        response = error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Field-level detail stays in the log; the client gets a generic message.
        logger.info("Invalid payload on %s %s: %s", request.method, request.url.path, exc.errors())
        return error_response(400, ValidationFailed.default_message)

    @app.exception_handler(PyMongoError)
    async def handle_storage_error(request: Request, exc: PyMongoError):
        logger.error(
            "Storage error on %s %s", request.method, request.url.path, exc_info=exc,
        )
        return error_response(500, SERVER_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.critical(
            "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc,
        )
        return error_response(500, SERVER_ERROR_MESSAGE)
