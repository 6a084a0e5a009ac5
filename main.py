"""
AvatarProxy - Entry Point
=========================

Relay Discord avatars and public profile fragments by user id.

Environment:
    TOKEN - Discord bot token (required)
    PORT  - Port to listen on (required)
    HOST  - Interface to bind (default: 127.0.0.1)
"""

import asyncio
import os
import platform
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from src.api import APIService
from src.core import load_config, log
from src.core.exceptions import ConfigurationError
from src.utils.security import hash_for_logging


# =============================================================================
# Constants
# =============================================================================

PROJECT_ROOT = Path(__file__).parent
"""Project root directory."""

APP_NAME = "AvatarProxy"
"""Name for startup logging."""


# =============================================================================
# Startup Helpers
# =============================================================================

def _get_git_commit() -> str:
    """Get the current git commit hash (short form)."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
            cwd=PROJECT_ROOT,
        )
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    if result.returncode == 0:
        return result.stdout.strip()
    return "unknown"


def _get_start_time() -> str:
    """Get formatted start time in EST."""
    return datetime.now(ZoneInfo("America/New_York")).strftime("%Y-%m-%d %H:%M:%S %Z")


async def main() -> None:
    """Start the relay."""
    try:
        config = load_config()
    except ConfigurationError as e:
        log.error("Configuration Invalid", [
            ("Error", e.message),
            *[(key.title(), value) for key, value in e.details.items()],
        ])
        sys.exit(1)

    log.startup_banner(APP_NAME, [
        ("Started At", _get_start_time()),
        ("Version", _get_git_commit()),
        ("Host", platform.node()),
        ("PID", str(os.getpid())),
        ("Python", platform.python_version()),
        ("Token", f"sha256:{hash_for_logging(config.TOKEN)}"),
    ])

    service = APIService(config)

    try:
        await service.serve()
    finally:
        log.shutdown_tree(APP_NAME)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.tree("Keyboard Interrupt", [
            ("Status", "Shut down"),
        ], emoji="⌨️")
