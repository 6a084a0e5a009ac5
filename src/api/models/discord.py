"""
AvatarProxy - Discord Models
============================

Pydantic model for the Discord user object.
Only id, username and discriminator are required; everything else is
optional on Discord's side too.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class UpstreamUserRecord(BaseModel):
    """A user as returned by GET /users/{id}."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    username: str
    discriminator: str
    avatar: Optional[str] = None
    banner: Optional[str] = None

    # Passed through untouched, nothing reads these
    accent_color: Optional[int] = None
    public_flags: int = 0
    bot: bool = False

    @property
    def tag(self) -> str:
        return f"{self.username}#{self.discriminator}"


__all__ = ["UpstreamUserRecord"]
