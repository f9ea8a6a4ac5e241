"""
Cheese Catalog Backend — Request Logging Middleware
=====================================================

What:  One access log line per request: method, path, status, duration,
       request id and client address.
How:   Times the downstream call and picks the level from the status class
       (5xx ERROR, 4xx WARNING, everything else INFO).
When:  Inside RequestIDMiddleware, so the request id is already set.

Request bodies are never logged; they carry image bytes.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cheese_api.config import settings
from cheese_api.middleware.request_id import request_id_var

logger = logging.getLogger("cheese_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its outcome and duration in milliseconds."""

    # Health probes run every few seconds and would drown everything else
    SKIP_PATHS = {f"{settings.api_prefix}/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIP_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
