"""
Shared HTTP Session Manager
===========================

One pooled aiohttp session for every outbound call the relay makes.

Features:
- Connection pooling for Discord API and CDN requests
- Explicit start/stop tied to the application lifespan
- aiohttp's own default timeout; nothing tighter is imposed
- No retries: a failed attempt is surfaced to the caller immediately

Usage:
    http = HTTPSessionManager()

    # In the app lifespan:
    await http.start()

    # JSON request (context manager, body released on exit):
    async with http.get("https://...", headers=headers) as resp:
        data = await resp.json()

    # Streaming request (caller must release the response):
    resp = await http.open("https://...")
    try:
        async for chunk in resp.content.iter_chunked(STREAM_CHUNK_SIZE):
            ...
    finally:
        resp.release()

    # On shutdown:
    await http.stop()
"""

import aiohttp
from typing import Optional

from src.core.logger import logger


# Chunk size when passing image bytes through
STREAM_CHUNK_SIZE = 64 * 1024

USER_AGENT = "AvatarProxy/1.0 (+https://git.nea.moe/nea/discordavatarproxy)"


# =============================================================================
# HTTP Session Manager
# =============================================================================

class HTTPSessionManager:
    """
    Manages a shared aiohttp ClientSession for the whole process.

    aiohttp sessions are safe to share between concurrent tasks on one
    event loop, so a single instance is handed to every request.
    """

    def __init__(self, user_agent: str = USER_AGENT):
        self._session: Optional[aiohttp.ClientSession] = None
        self._user_agent: str = user_agent

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get the current session. start() must have been awaited."""
        if self._session is None or self._session.closed:
            raise RuntimeError("HTTP session is not started")
        return self._session

    async def start(self) -> None:
        """Start the HTTP session with connection pooling."""
        if self._session is not None and not self._session.closed:
            return

        connector = aiohttp.TCPConnector(
            limit=100,  # Max connections
            limit_per_host=20,  # Discord API and CDN are the only hosts
            ttl_dns_cache=300,
            enable_cleanup_closed=True,
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": self._user_agent},
        )
        logger.tree("HTTP Session Manager", [
            ("Status", "Started"),
            ("Pooling", "Enabled"),
        ], emoji="🌐")

    async def stop(self) -> None:
        """Stop the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.tree("HTTP Session Manager", [
                ("Status", "Stopped"),
            ], emoji="🔌")

    # =========================================================================
    # Request Methods
    # =========================================================================

    def get(self, url: str, **kwargs):
        """Perform a GET request. Returns a context manager."""
        return self.session.get(url, **kwargs)

    async def open(self, url: str, **kwargs) -> aiohttp.ClientResponse:
        """
        Perform a GET request and return the unread response.

        The body is left on the wire so it can be streamed; the caller
        owns the response and must call release() on it.
        """
        return await self.session.get(url, **kwargs)


__all__ = [
    "HTTPSessionManager",
    "STREAM_CHUNK_SIZE",
    "USER_AGENT",
]
