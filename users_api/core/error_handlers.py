"""
Global exception handlers mapping typed user errors to HTTP responses.
"""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from .errors import ErrorKind, UserError

# Statuses used for reads and for anything not caught by a route. Mutating
# routes answer NOT_FOUND with 400 themselves (see routers.users).
READ_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register the user-error and request-validation handlers on the app."""

    @app.exception_handler(UserError)
    async def user_error_handler(request: Request, exc: UserError):
        if exc.kind is ErrorKind.UNAVAILABLE:
            logger.error("{} {} failed: {}", request.method, request.url.path, exc.message)
        else:
            logger.warning("{} {} rejected: {}", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=READ_STATUS[exc.kind], content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = validation_message(exc)
        logger.warning("Validation error on {}: {}", request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": message, "error": ErrorKind.VALIDATION_FAILURE.value},
        )


def validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = [str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path")]
        where = ".".join(loc)
        msg = error.get("msg", "invalid value")
        parts.append(f"{where}: {msg}" if where else msg)
    return "; ".join(parts) or "Invalid request"
