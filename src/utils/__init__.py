"""
AvatarProxy - Utilities
=======================

Shared utility modules.
"""

from src.utils.http import HTTPSessionManager
from src.utils.security import mask_secrets, hash_for_logging

__all__ = [
    "HTTPSessionManager",
    "mask_secrets",
    "hash_for_logging",
]
