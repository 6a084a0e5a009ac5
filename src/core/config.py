"""
AvatarProxy - Configuration
===========================

Central configuration management.
Everything comes from environment variables; the bot token and the
listen port are required, the rest have working defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from src.core.exceptions import InvalidConfigError, MissingConfigError


# =============================================================================
# Paths
# =============================================================================

ROOT_DIR = Path(__file__).parent.parent.parent
LOGS_DIR = ROOT_DIR / "logs"


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_HOST = "127.0.0.1"
DEFAULT_API_BASE = "https://discord.com/api/v10"
DEFAULT_CDN_BASE = "https://cdn.discordapp.com"
DEFAULT_PROJECT_URL = "https://git.nea.moe/nea/discordavatarproxy"


def _get_env_port(environ: Mapping[str, str], key: str) -> int:
    """Get a required environment variable as a TCP port."""
    value = environ.get(key)
    if not value:
        raise MissingConfigError("Required setting is not set", {"variable": key})
    try:
        port = int(value)
    except ValueError:
        raise InvalidConfigError("Port is not a number", {"variable": key, "value": value})
    if not 0 < port < 65536:
        raise InvalidConfigError("Port out of range", {"variable": key, "value": value})
    return port


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class Config:
    """Relay configuration, loaded once at startup and shared read-only."""

    # Discord bot token, sent upstream only
    TOKEN: str
    PORT: int

    HOST: str = DEFAULT_HOST

    # Upstream endpoints
    API_BASE: str = DEFAULT_API_BASE
    CDN_BASE: str = DEFAULT_CDN_BASE

    # Where GET / redirects to
    PROJECT_URL: str = DEFAULT_PROJECT_URL

    def __repr__(self) -> str:
        return f"Config(HOST={self.HOST!r}, PORT={self.PORT}, API_BASE={self.API_BASE!r})"


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build the configuration from the environment.

    Raises:
        MissingConfigError: TOKEN or PORT is not set.
        InvalidConfigError: PORT is not a valid port number.
    """
    if environ is None:
        environ = os.environ

    token = environ.get("TOKEN", "")
    if not token:
        raise MissingConfigError("Required setting is not set", {"variable": "TOKEN"})

    return Config(
        TOKEN=token,
        PORT=_get_env_port(environ, "PORT"),
        HOST=environ.get("HOST", DEFAULT_HOST),
        API_BASE=environ.get("DISCORD_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        CDN_BASE=environ.get("DISCORD_CDN_BASE", DEFAULT_CDN_BASE).rstrip("/"),
        PROJECT_URL=environ.get("PROJECT_URL", DEFAULT_PROJECT_URL),
    )


__all__ = [
    "Config",
    "load_config",
    "ROOT_DIR",
    "LOGS_DIR",
    "DEFAULT_HOST",
    "DEFAULT_API_BASE",
    "DEFAULT_CDN_BASE",
    "DEFAULT_PROJECT_URL",
]
