"""
AvatarProxy - FastAPI Application
=================================

Application factory and configuration.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core import Config, log
from src.core.exceptions import AvatarProxyError
from src.api.errors import NOT_FOUND, PublicError, error_response, translate_error
from src.api.middleware import ErrorTranslationMiddleware, LoggingMiddleware
from src.api.services.discord import DiscordClient
from src.utils.http import HTTPSessionManager


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Opens the shared HTTP session on startup and closes it on shutdown.
    """
    await app.state.http.start()
    log.debug("API Lifespan Started", [])
    yield
    await app.state.http.stop()
    log.debug("API Lifespan Ended", [])


# =============================================================================
# Application Factory
# =============================================================================

def create_app(config: Config, http: Optional[HTTPSessionManager] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Loaded configuration.
        http: Session manager for outbound calls. A new one is created
            when omitted.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="AvatarProxy",
        description="Discord avatar relay",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )

    # Shared, read-only for the life of the process
    app.state.config = config
    app.state.http = http or HTTPSessionManager()
    app.state.discord = DiscordClient(app.state.http, config.TOKEN, config.API_BASE)

    # =========================================================================
    # Middleware (order matters - last added = first executed)
    # =========================================================================

    app.add_middleware(ErrorTranslationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_middleware(LoggingMiddleware)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unmatched paths and methods, in the same plain-text form."""
        if exc.status_code == 404:
            return error_response(NOT_FOUND)
        # 405 carries the Allow header
        return error_response(PublicError(exc.status_code, str(exc.detail)), headers=exc.headers)

    @app.exception_handler(AvatarProxyError)
    async def avatar_proxy_error_handler(request: Request, exc: AvatarProxyError):
        """Typed errors that escaped the pipeline."""
        log.error_tree("API Error", exc, [("Path", str(request.url.path)[:60])])
        return error_response(translate_error(exc))

    # =========================================================================
    # Routers
    # =========================================================================

    from src.api.routers import avatar

    app.include_router(avatar.router)

    return app


__all__ = ["create_app"]
