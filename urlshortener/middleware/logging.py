"""
Request logging middleware for FastAPI using Loguru.

Every response carries an X-Request-ID header, and one log line per request
records method, path, status and processing time.
"""

import time
import uuid
from typing import Any, Dict

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware


def get_client_ip(request: Request) -> str:
    """Client IP, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request with a request ID bound to the log context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

        response.headers["X-Request-ID"] = request_id

        log_record: Dict[str, Any] = {
            "request_id": request_id,
            "client_ip": get_client_ip(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
        }
        if request.query_params:
            log_record["query_params"] = dict(request.query_params)

        logger.info("{method} {path} {status_code} {process_time_ms}ms", **log_record)
        return response
