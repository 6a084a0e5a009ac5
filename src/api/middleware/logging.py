"""
AvatarProxy - Logging Middleware
================================

One log entry per request, with timing and a request id.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.core import log


# =============================================================================
# Logging Middleware
# =============================================================================

class LoggingMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for request/response logging.

    Features:
    - Request ID generation, echoed in X-Request-ID
    - Request timing
    - Log level chosen from the response status
    """

    # Path prefixes to skip (crawler noise)
    SKIP_PREFIXES = (
        "/favicon.ico",
        "/robots.txt",
        "/.well-known",
    )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path.startswith(self.SKIP_PREFIXES):
            return await call_next(request)

        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000

        response.headers["X-Request-ID"] = request_id

        status = response.status_code
        log_data = [
            ("ID", request_id),
            ("Method", request.method),
            ("Path", path[:60]),
            ("IP", self._get_client_ip(request)),
            ("Status", str(status)),
            ("Duration", f"{duration_ms:.0f}ms"),
        ]

        if status >= 500:
            # 500 is our bug, 502 is Discord's; both deserve attention
            log.error("API Response", log_data)
        else:
            log.debug("API Response", log_data)

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP, considering proxies."""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host
        return "unknown"


__all__ = ["LoggingMiddleware"]
