"""Request context middleware using ContextVar.

Takes the request id from the X-Request-ID header (or generates one) and
stores it in the core.context ContextVar, so any downstream code (service,
repository, log patcher) can call get_request_id() without parameter passing.
Each request is logged once on the way in and once on the way out.
"""

import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.context import request_id_var

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its start, end and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start = time.perf_counter()
        try:
            logger.info("request.start {} {}", request.method, request.url.path)
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "request.end {} {} -> {} ({:.1f} ms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
            response.headers.setdefault("X-Request-ID", request_id)
            return response
        finally:
            request_id_var.reset(token)
