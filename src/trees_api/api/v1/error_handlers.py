"""
FastAPI exception handlers: the single place error responses are written.

Route handlers raise `ApiError` subclasses carrying `{status, message, details}`;
the handlers below serialize them with `.to_payload()` and the error's
`http_status`. Request validation failures and unexpected exceptions are
reported in the same shape.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from trees_api.exceptions.base import (
    ApiError,
    TreeRequestError,
    RepositoryError,
    ValidationError,
    DuplicateError,
    InvalidFieldError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """
    Known request failures (not-found, mismatched ids, rejected values).
    """
    cause = exc.__cause__
    storage_failure = isinstance(cause, RepositoryError) and not isinstance(
        cause, (ValidationError, DuplicateError, InvalidFieldError, NotFoundError)
    )
    level = logging.WARNING if storage_failure else logging.INFO
    logger.log(level, "ApiError for %s %s: status=%s details=%s",
               request.method, request.url.path, exc.status, exc.details)
    return JSONResponse(status_code=exc.http_status, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed JSON or wrongly typed body fields, e.g. `"height": "tall"`.
    """
    details = ", ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.info("Invalid request for %s %s: %s", request.method, request.url.path, details)
    error = TreeRequestError("Invalid request", details or None)
    return JSONResponse(status_code=error.http_status, content=error.to_payload())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Anything that escaped the handlers. DB internals never reach the client.
    """
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    error = ApiError("Internal server error", "Unexpected error", http_status=500)
    return JSONResponse(status_code=error.http_status, content=error.to_payload())


# Helper to register all handlers on an app (call this from the app factory)
def register_exception_handlers(app):
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
