"""
AvatarProxy - Error Translation Middleware
==========================================

Last line of defense: anything that escapes the request pipeline is
logged with its traceback and answered with a bare 500.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.core import log
from src.api.errors import error_response, translate_error
from src.utils.security import mask_secrets


class ErrorTranslationMiddleware(BaseHTTPMiddleware):
    """Convert unhandled exceptions into public error responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            log.exception("Unhandled API Error", [
                ("Path", request.url.path[:60]),
                ("Type", type(e).__name__),
                ("Error", mask_secrets(str(e))[:100]),
            ])
            return error_response(translate_error(e))


__all__ = ["ErrorTranslationMiddleware"]
