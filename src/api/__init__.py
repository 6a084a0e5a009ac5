"""
AvatarProxy - API Package
=========================

FastAPI-based relay for Discord avatars.

Features:
- Avatar image passthrough (/avatar/{id}.png)
- Public profile fragment (/avatar/{id}.json)
- Request logging and public-safe error responses
"""

from typing import Optional

import uvicorn

from src.core import Config, log
from src.api.app import create_app


# =============================================================================
# API Service
# =============================================================================

class APIService:
    """
    Manages the uvicorn server lifecycle.

    The FastAPI app and its HTTP session are built once here and shared
    by every request for the life of the process.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._server: Optional[uvicorn.Server] = None

    async def serve(self) -> None:
        """Run the server until it is asked to exit."""
        app = create_app(self._config)

        config = uvicorn.Config(
            app=app,
            host=self._config.HOST,
            port=self._config.PORT,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)

        log.tree("API Started", [
            ("Host", self._config.HOST),
            ("Port", str(self._config.PORT)),
            ("Endpoints", "/, /avatar/{id}.png, /avatar/{id}.json"),
        ], emoji="🌐")

        try:
            await self._server.serve()
        finally:
            self._server = None
            log.tree("API Stopped", [], emoji="✅")


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "APIService",
    "create_app",
]
