"""
Structured Logging Middleware

JSON request logging with a per-request id that is also attached to every
log record emitted while the request is being served.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"
_QUIET_PATHS = frozenset({"/health"})
_EXTRA_FIELDS = ("user", "method", "path", "status_code", "duration_ms", "client_ip")


class RequestIdFilter(logging.Filter):
    """Logging filter to add request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", ""):
            record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For") or request.headers.get("X-Real-IP")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request once it completes and echoes the request id back in
    the X-Request-ID response header. An incoming X-Request-ID is reused.
    """

    def __init__(self, app: ASGIApp, logger_name: str = "sitecms.access"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        # Outlives the contextvar reset below; read by the catch-all 500 handler
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            self._log_request(request, 500, start_time, request_id=request_id, error=str(e))
            raise
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        self._log_request(request, response.status_code, start_time, request_id=request_id)
        return response

    def _log_request(
        self,
        request: Request,
        status_code: int,
        start_time: float,
        request_id: str | None = None,
        error: str | None = None,
    ) -> None:
        if request.url.path in _QUIET_PATHS:
            return

        duration_ms = (time.perf_counter() - start_time) * 1000

        if status_code >= 500:
            log_level = logging.ERROR
        elif status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": _client_ip(request),
        }
        if request_id:
            extra["request_id"] = request_id

        # set by sitecms.auth.get_current_user
        user = getattr(request.state, "user", None)
        if user is not None:
            extra["user"] = user.username

        message = "%s %s - %d (%.2fms)"
        args = [request.method, request.url.path, status_code, duration_ms]
        if error:
            message += " - Error: %s"
            args.append(error)

        self.logger.log(log_level, message, *args, extra=extra)


def setup_structured_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """
    Configure root logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON formatter (True for production)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"))
    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)

    for logger_name, level in {
        "sitecms": log_level,
        "sitecms.access": log_level,
        "uvicorn.access": "WARNING",
        "sqlalchemy.engine": "WARNING",
    }.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))


def get_request_id() -> str:
    """Get the current request ID from context."""
    return request_id_var.get("")
