"""
AvatarProxy - Path Classification
=================================

Turns a request path into the one thing the relay should do with it.
The output format comes only from the suffix: .png is an image,
.json is a profile fragment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


AVATAR_PREFIX = "/avatar/"
IMAGE_SUFFIX = ".png"
JSON_SUFFIX = ".json"


class RouteKind(str, Enum):
    """Every outcome of classifying a path."""

    ROOT = "root"
    AVATAR_IMAGE = "image"
    AVATAR_JSON = "json"
    INVALID_FORMAT = "invalid_format"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteTarget:
    """A classified request path."""

    kind: RouteKind
    user_id: Optional[str] = None


def classify_path(path: str) -> RouteTarget:
    """
    Classify a request path.

    The user id is returned as the raw text before the suffix; it is
    validated later, so "/avatar/abc.png" is still an image request.

    Args:
        path: The URL path, without query string.

    Returns:
        The RouteTarget for the path.
    """
    if path == "/":
        return RouteTarget(RouteKind.ROOT)

    if not path.startswith(AVATAR_PREFIX):
        return RouteTarget(RouteKind.NOT_FOUND)

    rest = path[len(AVATAR_PREFIX):]

    if rest.endswith(IMAGE_SUFFIX):
        return RouteTarget(RouteKind.AVATAR_IMAGE, rest[:-len(IMAGE_SUFFIX)])

    if rest.endswith(JSON_SUFFIX):
        return RouteTarget(RouteKind.AVATAR_JSON, rest[:-len(JSON_SUFFIX)])

    return RouteTarget(RouteKind.INVALID_FORMAT)


__all__ = ["RouteKind", "RouteTarget", "classify_path", "AVATAR_PREFIX"]
