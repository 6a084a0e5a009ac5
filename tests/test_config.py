import pytest

from src.core.config import (
    DEFAULT_API_BASE,
    DEFAULT_CDN_BASE,
    DEFAULT_HOST,
    DEFAULT_PROJECT_URL,
    load_config,
)
from src.core.exceptions import InvalidConfigError, MissingConfigError


def test_load_config_with_required_values():
    config = load_config({"TOKEN": "abc", "PORT": "8080"})

    assert config.TOKEN == "abc"
    assert config.PORT == 8080
    assert config.HOST == DEFAULT_HOST
    assert config.API_BASE == DEFAULT_API_BASE
    assert config.CDN_BASE == DEFAULT_CDN_BASE
    assert config.PROJECT_URL == DEFAULT_PROJECT_URL


def test_load_config_overrides():
    config = load_config({
        "TOKEN": "abc",
        "PORT": "9000",
        "HOST": "0.0.0.0",
        "DISCORD_API_BASE": "http://localhost:1234/api/",
        "DISCORD_CDN_BASE": "http://localhost:1235/",
        "PROJECT_URL": "https://example.com",
    })

    assert config.HOST == "0.0.0.0"
    assert config.API_BASE == "http://localhost:1234/api"
    assert config.CDN_BASE == "http://localhost:1235"
    assert config.PROJECT_URL == "https://example.com"


@pytest.mark.parametrize("environ", [
    {"PORT": "8080"},
    {"TOKEN": "", "PORT": "8080"},
    {"TOKEN": "abc"},
    {"TOKEN": "abc", "PORT": ""},
])
def test_missing_required_values(environ):
    with pytest.raises(MissingConfigError):
        load_config(environ)


@pytest.mark.parametrize("port", ["http", "80.5", "0", "65536", "-1"])
def test_invalid_port(port):
    with pytest.raises(InvalidConfigError):
        load_config({"TOKEN": "abc", "PORT": port})


def test_repr_hides_token():
    config = load_config({"TOKEN": "super-secret-token", "PORT": "8080"})

    assert "super-secret-token" not in repr(config)
