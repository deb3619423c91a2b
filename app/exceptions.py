"""Application errors and the handlers that render them as JSON envelopes."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Product not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class AppException(Exception):
    """Base error that services and routes can raise."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_response(self) -> dict:
        return {"message": self.message}


class ValidationError(AppException):
    """One or more field rules failed for the incoming request."""

    status_code = 400

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} validation error(s)")

    def to_response(self) -> dict:
        return {"errors": [error.to_dict() for error in self.errors]}


class NotFoundError(AppException):
    """The addressed product does not exist."""

    status_code = 404

    def __init__(self, message: str = NOT_FOUND_MESSAGE):
        super().__init__(message)


class StoreError(AppException):
    """Unexpected persistence failure. The detail never reaches the client."""

    status_code = 500

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Store operation '{operation}' failed")

    def to_response(self) -> dict:
        return {"message": INTERNAL_ERROR_MESSAGE}


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert an AppException into its JSON envelope."""
    if isinstance(exc, ValidationError):
        logger.warning(
            f"Validation failed on {request.method} {request.url.path}: "
            f"{[error.message for error in exc.errors]}"
        )
    elif isinstance(exc, StoreError):
        logger.error(f"Store error on {request.url.path}: {exc.message} ({exc.detail})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request bodies with the same envelope as field rules."""
    logger.warning(f"Malformed request on {request.url.path}: {exc.errors()}")
    errors = [
        {
            "type": "field",
            "msg": e["msg"],
            "path": ".".join(str(loc) for loc in e["loc"][1:]) or e["loc"][0],
            "location": e["loc"][0],
        }
        for e in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled exceptions - returns 500."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
