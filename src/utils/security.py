"""
AvatarProxy - Security Utilities
================================

Keeps the bot token and other credentials out of log output.
"""

import re
import hashlib


# =============================================================================
# Secrets Protection
# =============================================================================

# Patterns that look like secrets
SECRET_PATTERNS = [
    (r"(token[\"']?\s*[:=]\s*[\"']?)([a-zA-Z0-9_.-]{20,})", r"\1***REDACTED***"),
    (r"(authorization[\"']?\s*[:=]\s*[\"']?)([^\s\"',}]+(?:\s+[^\s\"',}]+)?)", r"\1***REDACTED***"),
    (r"(Bot\s+)([a-zA-Z0-9_.-]{20,})", r"\1***REDACTED***"),  # Discord bot tokens
    (r"(Bearer\s+)([a-zA-Z0-9_.-]+)", r"\1***REDACTED***"),
]


def mask_secrets(text: str) -> str:
    """
    Mask potential secrets in text for safe logging.

    Args:
        text: Text that might contain secrets

    Returns:
        Text with secrets masked
    """
    if not text:
        return text

    result = text
    for pattern, replacement in SECRET_PATTERNS:
        result = re.sub(pattern, replacement, result, flags=re.IGNORECASE)

    return result


def hash_for_logging(value: str) -> str:
    """
    Create a truncated hash of a value for logging (for correlation without exposing the value).

    Args:
        value: Value to hash

    Returns:
        Truncated hash suitable for logging
    """
    if not value:
        return "<empty>"
    return hashlib.sha256(value.encode()).hexdigest()[:8]


__all__ = ["mask_secrets", "hash_for_logging", "SECRET_PATTERNS"]
