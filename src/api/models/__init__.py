"""
AvatarProxy - API Models
========================

Pydantic models for upstream payloads and public responses.
"""

from src.api.models.discord import UpstreamUserRecord
from src.api.models.profile import PublicProfile

__all__ = [
    "UpstreamUserRecord",
    "PublicProfile",
]
