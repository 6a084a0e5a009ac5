"""
AvatarProxy - Discord Service
=============================

Fetch user objects from the Discord REST API with the bot token.

A lookup is attempted exactly once. Every way it can go wrong is raised
as an UpstreamError subclass so the caller can decide what to show.
"""

import asyncio
import re

import aiohttp
from pydantic import ValidationError

from src.core import log
from src.core.exceptions import (
    InvalidUserIdError,
    MalformedBodyError,
    NetworkFailureError,
    NonSuccessStatusError,
)
from src.api.models.discord import UpstreamUserRecord
from src.utils.http import HTTPSessionManager


# Snowflakes are unsigned 64-bit integers
MAX_USER_ID = 2 ** 64 - 1

# Same grammar as an unsigned integer parse: one optional "+", then digits
_DIGITS = re.compile(r"\+?[0-9]+")


def parse_user_id(raw: str) -> int:
    """
    Validate a user id taken from the request path.

    Args:
        raw: The id text as it appeared in the URL.

    Returns:
        The id as an int.

    Raises:
        InvalidUserIdError: Not ASCII digits (one leading "+" allowed),
            or larger than 64 bits.
    """
    if not _DIGITS.fullmatch(raw):
        raise InvalidUserIdError("User id is not numeric", {"id": raw[:32]})

    user_id = int(raw)
    if user_id > MAX_USER_ID:
        raise InvalidUserIdError("User id out of range", {"id": raw[:32]})
    return user_id


class DiscordClient:
    """Authenticated access to Discord's user endpoint."""

    def __init__(self, http: HTTPSessionManager, token: str, api_base: str) -> None:
        self._http = http
        self._token = token
        self._api_base = api_base.rstrip("/")

    def user_url(self, user_id: int) -> str:
        return f"{self._api_base}/users/{user_id}"

    async def fetch_user(self, user_id: int) -> UpstreamUserRecord:
        """
        Fetch and parse one Discord user.

        Args:
            user_id: Validated numeric user id.

        Returns:
            The parsed user record.

        Raises:
            NetworkFailureError: Connection, TLS or timeout failure.
            NonSuccessStatusError: Discord answered with a non-2xx status.
            MalformedBodyError: Body is not JSON or lacks required fields.
        """
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bot {self._token}",
        }

        try:
            async with self._http.get(self.user_url(user_id), headers=headers) as resp:
                if not 200 <= resp.status < 300:
                    # Drain so the pooled connection can be reused
                    await resp.read()
                    raise NonSuccessStatusError(
                        "Discord returned an error status",
                        status_code=resp.status,
                        status=resp.status,
                    )

                try:
                    payload = await resp.json(content_type=None)
                except ValueError as e:
                    raise MalformedBodyError("Discord response is not JSON", {"error": str(e)[:50]})

        except asyncio.TimeoutError:
            raise NetworkFailureError("Discord request timed out", {"user_id": user_id})
        except aiohttp.ClientError as e:
            raise NetworkFailureError("Discord request failed", {"error": type(e).__name__})

        try:
            record = UpstreamUserRecord.model_validate(payload)
        except ValidationError as e:
            raise MalformedBodyError("Discord user object is malformed", {"errors": e.error_count()})

        log.debug("Discord User Fetched", [
            ("ID", record.id),
            ("User", record.tag),
        ])
        return record


__all__ = ["DiscordClient", "parse_user_id", "MAX_USER_ID"]
