"""
Request middleware for logging, timing, metrics and request ID tracking.
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from venue_platform.core.logging import get_logger
from venue_platform.core.metrics import record_http_request

logger = get_logger(__name__)

# Counted in metrics but not logged
QUIET_PATHS = frozenset({"/metrics", "/health"})


def route_template(request: Request) -> str:
    """The matched route's path template, or "unmatched" for 404s."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Per request:
      - reuse the caller's X-Request-ID or mint one
      - bind request_id, method and path into structlog contextvars
      - log the outcome and record it in Prometheus by route template
      - echo X-Request-ID and X-Response-Time back to the caller
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        start_time = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            record_http_request(request.method, route_template(request), 500, elapsed)
            logger.error("request_failed", error=str(e), duration_ms=round(elapsed * 1000, 2))
            raise

        elapsed = time.perf_counter() - start_time
        duration_ms = round(elapsed * 1000, 2)
        record_http_request(request.method, route_template(request), response.status_code, elapsed)

        if request.url.path not in QUIET_PATHS:
            log = logger.warning if response.status_code >= 500 else logger.info
            log("request_completed", status_code=response.status_code, duration_ms=duration_ms)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response
