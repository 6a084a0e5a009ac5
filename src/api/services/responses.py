"""
AvatarProxy - Response Builder
==============================

Build the final response for an avatar request.

Each stage returns either a finished Response (the request ends there,
usually with a public error) or the input for the next stage. Callers
check for a Response explicitly before moving on.
"""

import asyncio
from typing import AsyncIterator, Union

import aiohttp
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from src.core import log
from src.core.exceptions import FormatError, InvalidUserIdError, UpstreamError
from src.api.errors import (
    NOT_FOUND,
    UPSTREAM_FAILED,
    avatar_fetch_failed,
    error_response,
)
from src.api.models.discord import UpstreamUserRecord
from src.api.models.profile import PublicProfile
from src.api.services.avatars import resolve_avatar_url, resolve_banner_url
from src.api.services.discord import DiscordClient, parse_user_id
from src.utils.http import HTTPSessionManager, STREAM_CHUNK_SIZE


IMAGE_MEDIA_TYPE = "image/png"


# =============================================================================
# Pipeline Stages
# =============================================================================

async def lookup_user(client: DiscordClient, raw_id: str) -> Union[Response, UpstreamUserRecord]:
    """Validate the id and fetch the user, or return the error response."""
    try:
        user_id = parse_user_id(raw_id)
    except InvalidUserIdError:
        return error_response(NOT_FOUND)

    try:
        return await client.fetch_user(user_id)
    except UpstreamError as e:
        log.error_tree("Discord Lookup Failed", e, [("User ID", user_id)])
        return error_response(UPSTREAM_FAILED)


def resolve_avatar(record: UpstreamUserRecord, cdn_base: str) -> Union[Response, str]:
    """Resolve the avatar URL, or return the error response."""
    try:
        return resolve_avatar_url(record, cdn_base)
    except FormatError as e:
        log.error_tree("Malformed Discord User", e, [("User ID", record.id)])
        return error_response(UPSTREAM_FAILED)


async def open_avatar(http: HTTPSessionManager, url: str) -> Union[Response, aiohttp.ClientResponse]:
    """Start downloading the avatar image, or return the error response."""
    try:
        resp = await http.open(url)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        log.error_tree("Avatar Fetch Failed", e, [("URL", url)])
        return error_response(avatar_fetch_failed(url))

    if not 200 <= resp.status < 300:
        log.warning("Avatar Fetch Failed", [
            ("URL", url),
            ("Status", resp.status),
        ])
        resp.release()
        return error_response(avatar_fetch_failed(url))

    return resp


async def _iter_body(resp: aiohttp.ClientResponse, url: str) -> AsyncIterator[bytes]:
    """Yield the upstream body unchanged."""
    try:
        async for chunk in resp.content.iter_chunked(STREAM_CHUNK_SIZE):
            yield chunk
    except aiohttp.ClientError as e:
        # Headers are already sent; the caller sees a truncated body
        log.error_tree("Avatar Stream Interrupted", e, [("URL", url)])
        raise
    finally:
        resp.release()


# =============================================================================
# Responses
# =============================================================================

async def respond_with_json(client: DiscordClient, raw_id: str, cdn_base: str) -> Response:
    """Serve /avatar/{id}.json."""
    record = await lookup_user(client, raw_id)
    if isinstance(record, Response):
        return record

    avatar_url = resolve_avatar(record, cdn_base)
    if isinstance(avatar_url, Response):
        return avatar_url

    profile = PublicProfile(
        username=record.username,
        discriminator=record.discriminator,
        avatar=avatar_url,
        banner=resolve_banner_url(record, cdn_base),
    )
    return JSONResponse(profile.model_dump(), status_code=200)


async def respond_with_image(
    client: DiscordClient,
    http: HTTPSessionManager,
    raw_id: str,
    cdn_base: str,
) -> Response:
    """Serve /avatar/{id}.png by passing the CDN image through."""
    record = await lookup_user(client, raw_id)
    if isinstance(record, Response):
        return record

    avatar_url = resolve_avatar(record, cdn_base)
    if isinstance(avatar_url, Response):
        return avatar_url

    upstream = await open_avatar(http, avatar_url)
    if isinstance(upstream, Response):
        return upstream

    # release() is idempotent; the background task covers early disconnects
    return StreamingResponse(
        _iter_body(upstream, avatar_url),
        status_code=200,
        media_type=IMAGE_MEDIA_TYPE,
        background=BackgroundTask(upstream.release),
    )


__all__ = [
    "lookup_user",
    "resolve_avatar",
    "open_avatar",
    "respond_with_json",
    "respond_with_image",
    "IMAGE_MEDIA_TYPE",
]
