"""
AvatarProxy - Public Profile Model
==================================

The only user data a caller ever sees.
"""

from typing import Optional
from pydantic import BaseModel


class PublicProfile(BaseModel):
    """Public JSON fragment served by /avatar/{id}.json."""

    username: str
    discriminator: str
    avatar: str
    banner: Optional[str] = None


__all__ = ["PublicProfile"]
