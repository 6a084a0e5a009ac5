"""
AvatarProxy - Avatar Router
===========================

GET /                   redirect to the project page
GET /avatar/{id}.png    the user's avatar image
GET /avatar/{id}.json   the user's public profile fragment
"""

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse, Response

from src.core import log
from src.api.errors import INVALID_FORMAT, NOT_FOUND, error_response
from src.api.routing import RouteKind, classify_path
from src.api.services.responses import respond_with_image, respond_with_json


router = APIRouter(tags=["Avatar"])


def _raw_path(request: Request) -> str:
    """The path exactly as sent, before percent-decoding."""
    raw = request.scope.get("raw_path")
    if not raw:
        return request.url.path
    return raw.split(b"?", 1)[0].decode("latin-1")


@router.get("/")
async def root(request: Request) -> RedirectResponse:
    """Redirect to the project info page."""
    return RedirectResponse(url=request.app.state.config.PROJECT_URL, status_code=302)


@router.get("/avatar/{rest:path}")
async def get_avatar(request: Request, rest: str) -> Response:
    """
    Serve an avatar image or profile fragment.

    The suffix picks the format; the rest of the segment is the user id.
    """
    state = request.app.state
    target = classify_path(_raw_path(request))

    if target.kind is RouteKind.AVATAR_IMAGE:
        return await respond_with_image(state.discord, state.http, target.user_id, state.config.CDN_BASE)

    if target.kind is RouteKind.AVATAR_JSON:
        return await respond_with_json(state.discord, target.user_id, state.config.CDN_BASE)

    if target.kind is RouteKind.INVALID_FORMAT:
        log.debug("Avatar Request Rejected", [("Reason", "Invalid format"), ("Path", rest[:60])])
        return error_response(INVALID_FORMAT)

    return error_response(NOT_FOUND)


__all__ = ["router"]
