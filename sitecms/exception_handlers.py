"""
Exception handlers that turn every failure into one JSON error envelope:

    {"error": {"status_code": 404,
               "error_code": "RESOURCE_SITE_NOT_FOUND",
               "message": "Site with id '123' not found",
               "type": "Not Found",
               "details": {"resource_type": "Site", "resource_id": 123},
               "path": "/api/content/export/123",
               "request_id": "..."}}

Persistence and unexpected failures never leak driver or stack detail.
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitecms.exceptions import CMSError, DatabaseError, ErrorCode
from sitecms.middleware.logging import get_request_id

logger = logging.getLogger(__name__)

# Error codes for plain HTTPExceptions raised by FastAPI/Starlette themselves
HTTP_ERROR_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_FAILED,
    401: ErrorCode.AUTH_FAILED,
    403: ErrorCode.AUTH_PERMISSION_DENIED,
    404: ErrorCode.RESOURCE_NOT_FOUND,
    409: ErrorCode.VALIDATION_DUPLICATE_RESOURCE,
    422: ErrorCode.VALIDATION_FAILED,
    500: ErrorCode.INTERNAL_ERROR,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def get_error_type(status_code: int) -> str:
    """Short human-readable label for a status code."""
    if status_code == status.HTTP_422_UNPROCESSABLE_ENTITY:
        return "Validation Error"
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def get_http_error_code(status_code: int) -> str:
    return HTTP_ERROR_CODES.get(status_code, ErrorCode.UNKNOWN_ERROR).value


def create_error_response(
    status_code: int,
    message: str,
    error_code: str | ErrorCode | None = None,
    details: dict[str, Any] | None = None,
    path: str | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    """Build the error envelope; empty optional fields are left out."""
    error: dict[str, Any] = {
        "status_code": status_code,
        "message": message,
        "type": get_error_type(status_code),
    }
    if error_code:
        error["error_code"] = error_code.value if isinstance(error_code, ErrorCode) else error_code
    optional = {"details": details, "path": path, "request_id": request_id}
    error.update({key: value for key, value in optional.items() if value})
    return JSONResponse(status_code=status_code, content={"error": error})


def _respond(request: Request, status_code: int, message: str, error_code, details=None) -> JSONResponse:
    return create_error_response(
        status_code=status_code,
        message=message,
        error_code=error_code,
        details=details,
        path=request.url.path,
        request_id=getattr(request.state, "request_id", None) or get_request_id(),
    )


async def cms_exception_handler(request: Request, exc: CMSError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s on %s %s: %s",
        exc.error_code.value,
        request.method,
        request.url.path,
        exc.message,
        extra={"status_code": exc.status_code},
    )
    return _respond(request, exc.status_code, exc.message, exc.error_code, exc.details or None)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("HTTP %d on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)

    response = _respond(request, exc.status_code, str(exc.detail), get_http_error_code(exc.status_code))
    # Keeps WWW-Authenticate on 401s
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every invalid field of the path, query or body."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning("Invalid request to %s: %d field error(s)", request.url.path, len(errors))

    return _respond(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        ErrorCode.VALIDATION_FAILED,
        {"validation_errors": errors},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """
    A persistence failure aborts the whole request: nothing computed before
    the failure reaches the client, only the envelope.
    """
    logger.error("Database error during %s %s", request.method, request.url.path, exc_info=exc)
    error = DatabaseError(operation=f"{request.method} {request.url.path}")
    return _respond(request, error.status_code, error.message, error.error_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled %s during %s %s", type(exc).__name__, request.method, request.url.path, exc_info=exc)
    return _respond(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        ErrorCode.INTERNAL_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CMSError, cms_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
