"""Request logging middleware: one log line and one metrics sample per request, plus a timing header."""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from geodist.monitoring import record_request

logger = logging.getLogger(__name__)

TIMING_HEADER = "X-Response-Time-Ms"


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        record_request(response.status_code)
        response.headers[TIMING_HEADER] = f"{duration_ms:.1f}"
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request method=%s path=%s status=%s duration_ms=%.1f client=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            _client_ip(request),
        )
        return response
