import json
import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="avatarproxy-logs-"))

from src.core.config import Config


TOKEN = "test-token-abcdefghijklmnopqrstuvwxyz"
API_BASE = "https://discord.com/api/v10"
CDN_BASE = "https://cdn.discordapp.com"


class FakeContent:
    """Body stream; raises `error` (if given) once the body is exhausted."""

    def __init__(self, body: bytes, error: BaseException = None) -> None:
        self._body = body
        self._error = error

    async def iter_chunked(self, size: int):
        for start in range(0, len(self._body), size):
            yield self._body[start:start + size]
        if self._error is not None:
            raise self._error


class FakeResponse:
    """Just enough of aiohttp.ClientResponse for the relay."""

    def __init__(self, status: int = 200, body=b"") -> None:
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode()
        elif isinstance(body, str):
            body = body.encode()
        self.status = status
        self.body = body
        self.content = FakeContent(body)
        self.released = False

    async def read(self) -> bytes:
        return self.body

    async def json(self, content_type=None):
        return json.loads(self.body)

    def release(self) -> None:
        self.released = True


class _FakeRequest:
    def __init__(self, outcome) -> None:
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, exc_type, exc, tb):
        if isinstance(self._outcome, FakeResponse):
            self._outcome.release()
        return False


class FakeHTTP:
    """
    Stand-in for HTTPSessionManager.

    Map a URL to a FakeResponse or to an exception to raise. Unmapped
    URLs answer 404. Every call is recorded in `calls` as (url, headers),
    and its full keyword arguments in `options`.
    """

    def __init__(self) -> None:
        self.routes = {}
        self.calls = []
        self.options = []
        self.started = False

    def add(self, url: str, outcome) -> None:
        self.routes[url] = outcome

    def _outcome(self, url: str):
        return self.routes.get(url, FakeResponse(404, {"message": "Unknown", "code": 0}))

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.started = False

    def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs.get("headers", {})))
        self.options.append(kwargs)
        return _FakeRequest(self._outcome(url))

    async def open(self, url: str, **kwargs):
        self.calls.append((url, kwargs.get("headers", {})))
        self.options.append(kwargs)
        outcome = self._outcome(url)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def user_url(user_id) -> str:
    return f"{API_BASE}/users/{user_id}"


def discord_user(user_id="123", username="nea", discriminator="0007", **extra):
    payload = {
        "id": user_id,
        "username": username,
        "discriminator": discriminator,
        "avatar": None,
        "banner": None,
        "accent_color": None,
        "public_flags": 0,
    }
    payload.update(extra)
    return payload


@pytest.fixture
def config():
    return Config(TOKEN=TOKEN, PORT=8080, API_BASE=API_BASE, CDN_BASE=CDN_BASE)


@pytest.fixture
def fake_http():
    return FakeHTTP()


@pytest.fixture
def client(config, fake_http):
    from fastapi.testclient import TestClient
    from src.api.app import create_app

    app = create_app(config, http=fake_http)
    with TestClient(app) as test_client:
        yield test_client
