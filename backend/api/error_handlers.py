"""
Exception handlers.

Maps the error kinds raised by the modules to HTTP responses. Every error
body has the shape {"error": <message>, "code": <code>}.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from modules.auth.exceptions import InvalidCredentialsError
from shared.exceptions import AppError, ErrorKind

from .models.errors import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_for(exc: AppError) -> int:
    """HTTP status for an application error."""
    # Failed logins have always answered 400, like the other form errors.
    if isinstance(exc, InvalidCredentialsError):
        return status.HTTP_400_BAD_REQUEST
    return STATUS_BY_KIND[exc.kind]


def _error_response(status_code: int, message: str, code: str, headers=None) -> JSONResponse:
    body = ErrorResponse(error=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        status_code = status_for(exc)

        if exc.kind == ErrorKind.INTERNAL:
            logger.error(
                "Internal error on %s %s: %s (%s)",
                request.method, request.url.path, exc.message, exc.code,
                exc_info=exc,
            )
            return _error_response(status_code, INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR")

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return _error_response(status_code, exc.message, exc.code, headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Malformed request on %s: %s", request.url.path, exc.errors())
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Malformed request body",
            "MALFORMED_REQUEST",
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(
            exc.status_code,
            str(exc.detail),
            "HTTP_ERROR",
            getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_ERROR_MESSAGE,
            "INTERNAL_ERROR",
        )
