"""
Error taxonomy for the inventory API.

Services raise these; `setup_exception_handlers` turns them into JSON
responses of the form ``{"message": ..., "code": ...}``. The client SDK
raises the same classes when it reads an error body back.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

INTERNAL_ERROR_MESSAGE = "Internal server error"


class InventoryError(Exception):
    """Base exception for inventory errors."""

    code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(InventoryError):
    """Missing or malformed input."""

    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(InventoryError):
    """Duplicate unique key (username, category name)."""

    code = "CONFLICT"
    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(InventoryError):
    """
    Bad credentials or a missing/invalid token.

    401 when credentials are missing or wrong, 403 when a token was
    presented but failed verification.
    """

    code = "AUTH_ERROR"
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(InventoryError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND


class UnknownError(InventoryError):
    code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE, status_code: int | None = None):
        super().__init__(message, status_code)


ERRORS_BY_CODE: dict[str, type[InventoryError]] = {
    cls.code: cls
    for cls in (ValidationError, ConflictError, AuthError, NotFoundError, UnknownError)
}


def create_error_response(message: str, code: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "code": code},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI app."""

    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(request: Request, exc: InventoryError):
        logger.warning(
            "{} {} -> {} {}: {}",
            request.method,
            request.url.path,
            exc.status_code,
            exc.code,
            exc.message,
        )
        return create_error_response(exc.message, exc.code, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        if location:
            message = f"{location}: {message}"
        logger.warning("Request validation failed on {}: {}", request.url.path, message)
        return create_error_response(message, ValidationError.code, ValidationError.status_code)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.opt(exception=exc).error(
            "Database error on {} {}", request.method, request.url.path
        )
        return create_error_response(
            INTERNAL_ERROR_MESSAGE, UnknownError.code, UnknownError.status_code
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(
            "Unhandled {} on {} {}", type(exc).__name__, request.method, request.url.path
        )
        return create_error_response(
            INTERNAL_ERROR_MESSAGE, UnknownError.code, UnknownError.status_code
        )
