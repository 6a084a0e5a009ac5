"""
AvatarProxy - API Middleware
============================
"""

from .errors import ErrorTranslationMiddleware
from .logging import LoggingMiddleware

__all__ = ["ErrorTranslationMiddleware", "LoggingMiddleware"]
