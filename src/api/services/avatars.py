"""
AvatarProxy - Avatar URLs
=========================

Derive CDN URLs for a user's avatar and banner.

Users without a custom avatar get one of Discord's five default
avatars, picked by discriminator modulo 5.
"""

import re
from typing import Optional

from src.core import log
from src.core.exceptions import FormatError
from src.api.models.discord import UpstreamUserRecord


# Number of default avatar slots on the CDN
DEFAULT_AVATAR_COUNT = 5

_DIGITS = re.compile(r"[0-9]+")


def default_avatar_index(discriminator: str) -> int:
    """
    Pick the default avatar slot for a discriminator.

    Raises:
        FormatError: The discriminator is not a number.
    """
    if not _DIGITS.fullmatch(discriminator):
        raise FormatError("Discriminator is not numeric", {"discriminator": discriminator[:8]})
    return int(discriminator) % DEFAULT_AVATAR_COUNT


def default_avatar_url(discriminator: str, cdn_base: str) -> str:
    return f"{cdn_base}/embed/avatars/{default_avatar_index(discriminator)}.png"


def resolve_avatar_url(record: UpstreamUserRecord, cdn_base: str) -> str:
    """
    Get the avatar URL for a user.

    Args:
        record: The user as returned by Discord.
        cdn_base: CDN prefix, without trailing slash.

    Returns:
        The custom avatar URL, or the default avatar URL when the user
        has no avatar hash.

    Raises:
        FormatError: No avatar hash and a non-numeric discriminator.
    """
    log.info("Served Request", [
        ("ID", record.id),
        ("User", record.tag),
    ])

    if record.avatar:
        return f"{cdn_base}/avatars/{record.id}/{record.avatar}.png"
    return default_avatar_url(record.discriminator, cdn_base)


def resolve_banner_url(record: UpstreamUserRecord, cdn_base: str) -> Optional[str]:
    """Get the banner URL for a user, or None if they have no banner."""
    if record.banner:
        return f"{cdn_base}/banners/{record.id}/{record.banner}.png"
    return None


__all__ = [
    "DEFAULT_AVATAR_COUNT",
    "default_avatar_index",
    "default_avatar_url",
    "resolve_avatar_url",
    "resolve_banner_url",
]
