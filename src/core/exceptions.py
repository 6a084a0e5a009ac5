"""
AvatarProxy - Custom Exceptions
===============================

Exception classes for every failure the relay can run into.
Each one maps to a public error in src.api.errors.
"""

# =============================================================================
# Base Exceptions
# =============================================================================

class AvatarProxyError(Exception):
    """Base exception for all AvatarProxy errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Routing Exceptions
# =============================================================================

class RoutingError(AvatarProxyError):
    """Base exception for requests that cannot be routed."""
    pass


class InvalidUserIdError(RoutingError):
    """Raised when the requested user id is not an unsigned integer."""
    pass


class InvalidFormatError(RoutingError):
    """Raised when an /avatar/ path has no recognized suffix."""
    pass


# =============================================================================
# Upstream Exceptions
# =============================================================================

class UpstreamError(AvatarProxyError):
    """Base exception for failed Discord API lookups."""
    pass


class NetworkFailureError(UpstreamError):
    """Raised on connection, TLS or timeout failures."""
    pass


class NonSuccessStatusError(UpstreamError):
    """Raised when Discord answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int = None, **kwargs):
        super().__init__(message, kwargs)
        self.status_code = status_code


class MalformedBodyError(UpstreamError):
    """Raised when the response is not JSON or misses required fields."""
    pass


# =============================================================================
# Avatar Exceptions
# =============================================================================

class FormatError(AvatarProxyError):
    """Raised when upstream data violates the expected user shape."""
    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigurationError(AvatarProxyError):
    """Base exception for configuration-related errors."""
    pass


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration value is invalid."""
    pass


__all__ = [
    "AvatarProxyError",
    "RoutingError",
    "InvalidUserIdError",
    "InvalidFormatError",
    "UpstreamError",
    "NetworkFailureError",
    "NonSuccessStatusError",
    "MalformedBodyError",
    "FormatError",
    "ConfigurationError",
    "MissingConfigError",
    "InvalidConfigError",
]
