import asyncio

import aiohttp
import pytest

from src.api.services.discord import DiscordClient, MAX_USER_ID, parse_user_id
from src.core.exceptions import (
    InvalidUserIdError,
    MalformedBodyError,
    NetworkFailureError,
    NonSuccessStatusError,
    UpstreamError,
)

from conftest import API_BASE, TOKEN, FakeResponse, discord_user, user_url


def _client(fake_http) -> DiscordClient:
    return DiscordClient(fake_http, TOKEN, API_BASE)


@pytest.mark.parametrize("raw, expected", [
    ("123", 123),
    ("0", 0),
    ("00123", 123),
    ("+123", 123),
    (str(MAX_USER_ID), MAX_USER_ID),
])
def test_parse_user_id_accepts_unsigned_integers(raw, expected):
    assert parse_user_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "notanumber", "-1", "+", "++1", "+-1", "1.5", "12 3", str(MAX_USER_ID + 1), "１２３"])
def test_parse_user_id_rejects_everything_else(raw):
    with pytest.raises(InvalidUserIdError):
        parse_user_id(raw)


def test_fetch_user_sends_bot_token(fake_http):
    fake_http.add(user_url(123), FakeResponse(200, discord_user(avatar="abcd")))

    record = asyncio.run(_client(fake_http).fetch_user(123))

    assert record.id == "123"
    assert record.avatar == "abcd"
    assert record.bot is False

    url, headers = fake_http.calls[0]
    assert url == "https://discord.com/api/v10/users/123"
    assert headers["Authorization"] == f"Bot {TOKEN}"
    assert headers["Accept"] == "application/json"


def test_fetch_user_leaves_timeout_to_transport(fake_http):
    fake_http.add(user_url(123), FakeResponse(200, discord_user()))

    asyncio.run(_client(fake_http).fetch_user(123))

    assert "timeout" not in fake_http.options[0]


def test_fetch_user_ignores_unused_fields(fake_http):
    payload = discord_user(accent_color=16711680, public_flags=64, bot=True, global_name="Nea")
    fake_http.add(user_url(123), FakeResponse(200, payload))

    record = asyncio.run(_client(fake_http).fetch_user(123))

    assert record.accent_color == 16711680
    assert record.bot is True


def test_non_success_status(fake_http):
    fake_http.add(user_url(123), FakeResponse(500, "oops"))

    with pytest.raises(NonSuccessStatusError) as excinfo:
        asyncio.run(_client(fake_http).fetch_user(123))

    assert excinfo.value.status_code == 500


def test_unknown_user_is_non_success(fake_http):
    with pytest.raises(NonSuccessStatusError) as excinfo:
        asyncio.run(_client(fake_http).fetch_user(999))

    assert excinfo.value.status_code == 404


@pytest.mark.parametrize("error", [
    aiohttp.ClientConnectionError("connection refused"),
    asyncio.TimeoutError(),
])
def test_network_failure(fake_http, error):
    fake_http.add(user_url(123), error)

    with pytest.raises(NetworkFailureError):
        asyncio.run(_client(fake_http).fetch_user(123))


def test_body_that_is_not_json(fake_http):
    fake_http.add(user_url(123), FakeResponse(200, "<html>cloudflare</html>"))

    with pytest.raises(MalformedBodyError):
        asyncio.run(_client(fake_http).fetch_user(123))


@pytest.mark.parametrize("payload", [
    {"id": "123", "username": "nea"},
    {"id": 123, "username": "nea", "discriminator": "0001"},
    [],
])
def test_body_missing_required_fields(fake_http, payload):
    fake_http.add(user_url(123), FakeResponse(200, payload))

    with pytest.raises(MalformedBodyError):
        asyncio.run(_client(fake_http).fetch_user(123))


def test_never_retries(fake_http):
    fake_http.add(user_url(123), FakeResponse(503, ""))

    with pytest.raises(UpstreamError):
        asyncio.run(_client(fake_http).fetch_user(123))

    assert len(fake_http.calls) == 1
