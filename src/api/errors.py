"""
AvatarProxy - Public Errors
===========================

The fixed vocabulary of error responses a caller can receive, and the
mapping from internal exceptions onto it. Nothing an exception carries
(messages, details, upstream bodies) is ever copied into a response.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from fastapi.responses import PlainTextResponse

from src.core.exceptions import (
    FormatError,
    InvalidFormatError,
    RoutingError,
    UpstreamError,
)


# =============================================================================
# Public Error Vocabulary
# =============================================================================

@dataclass(frozen=True)
class PublicError:
    """Status code and message sent to a caller on failure."""

    status_code: int
    message: str

    @property
    def body(self) -> str:
        return f"{self.status_code} {self.message}"


NOT_FOUND = PublicError(404, "Not found")
INVALID_FORMAT = PublicError(404, "Invalid format")
UPSTREAM_FAILED = PublicError(502, "Discord failed to respond")
INTERNAL_ERROR = PublicError(500, "Internal Error")


def avatar_fetch_failed(url: str) -> PublicError:
    """502 naming the avatar URL that could not be fetched."""
    return PublicError(502, f"Discord failed to supply avatar for url: {url}")


# =============================================================================
# Translation
# =============================================================================

def translate_error(exc: BaseException) -> PublicError:
    """Map any exception onto its public error."""
    if isinstance(exc, InvalidFormatError):
        return INVALID_FORMAT
    if isinstance(exc, RoutingError):
        return NOT_FOUND
    # A malformed discriminator means Discord broke its own contract
    if isinstance(exc, (UpstreamError, FormatError)):
        return UPSTREAM_FAILED
    return INTERNAL_ERROR


def error_response(error: PublicError, headers: Optional[Mapping[str, str]] = None) -> PlainTextResponse:
    """Render a public error as a plain-text response."""
    return PlainTextResponse(error.body, status_code=error.status_code, headers=headers)


__all__ = [
    "PublicError",
    "NOT_FOUND",
    "INVALID_FORMAT",
    "UPSTREAM_FAILED",
    "INTERNAL_ERROR",
    "avatar_fetch_failed",
    "translate_error",
    "error_response",
]
