from __future__ import annotations

import contextvars
import sys
import time
import uuid
from typing import Callable, Optional, TextIO

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from form_data.settings import settings

_logger_ctx: contextvars.ContextVar = contextvars.ContextVar("_logger_ctx", default=logger)

_PLAIN_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | "
    "request_id={extra[request_id]} | formatter={extra[formatter]} | "
    "{extra[method]} {extra[path]} | {message}"
)


def init_logging(
    level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    sink: TextIO = sys.stdout,
    enqueue: bool = True,
) -> None:
    """Configure Loguru, falling back to settings for level and JSON output.

    The CLI logs synchronously to ``sys.stderr`` so encoded bodies own stdout.
    """

    level = (level or settings.log_level).upper()
    serialize = settings.log_json if json_logs is None else json_logs

    logger.remove()
    logger.configure(
        extra={
            "request_id": "-",
            "path": "-",
            "method": "-",
            "status_code": 0,
            "duration_ms": 0.0,
            "body_bytes": 0,
            "formatter": "-",
        }
    )
    options = {"level": level, "enqueue": enqueue, "backtrace": False, "diagnose": False}
    if serialize:
        logger.add(sink, serialize=True, **options)
    else:
        logger.add(sink, format=_PLAIN_FORMAT, **options)


def get_logger():  # noqa: ANN001
    """Return the request-scoped logger if available, otherwise the base logger."""

    return _logger_ctx.get()


def bind_formatter(name: str) -> None:
    """Tag the current request logger with the formatter being used."""

    _logger_ctx.set(get_logger().bind(formatter=name))


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind request id, path and body size to a per-request logger."""

    async def dispatch(self, request: Request, call_next: Callable):  # type: ignore[override]
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        started = time.perf_counter()
        request_logger = logger.bind(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            body_bytes=int(request.headers.get("content-length") or 0),
        )
        token = _logger_ctx.set(request_logger)

        try:
            response = await call_next(request)
        except Exception:
            elapsed = (time.perf_counter() - started) * 1000
            request_logger.bind(status_code=500, duration_ms=elapsed).exception("request.failed")
            raise
        finally:
            _logger_ctx.reset(token)

        elapsed = (time.perf_counter() - started) * 1000
        request_logger.bind(status_code=response.status_code, duration_ms=elapsed).info("request.completed")
        response.headers["x-request-id"] = request_id
        return response
