"""
AvatarProxy - API Services
==========================
"""

from .discord import DiscordClient, parse_user_id
from .avatars import default_avatar_index, resolve_avatar_url, resolve_banner_url
from .responses import respond_with_image, respond_with_json

__all__ = [
    "DiscordClient",
    "parse_user_id",
    "default_avatar_index",
    "resolve_avatar_url",
    "resolve_banner_url",
    "respond_with_image",
    "respond_with_json",
]
