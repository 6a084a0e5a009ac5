import pytest

from src.api.routing import RouteKind, RouteTarget, classify_path


def test_root_path():
    assert classify_path("/") == RouteTarget(RouteKind.ROOT)


@pytest.mark.parametrize("user_id", ["123", "0", "80351110224678912", "18446744073709551615", "007"])
def test_same_id_for_both_formats(user_id):
    image = classify_path(f"/avatar/{user_id}.png")
    profile = classify_path(f"/avatar/{user_id}.json")

    assert image.kind is RouteKind.AVATAR_IMAGE
    assert profile.kind is RouteKind.AVATAR_JSON
    assert image.user_id == profile.user_id == user_id


@pytest.mark.parametrize("path", ["/avatar/123.gif", "/avatar/123", "/avatar/", "/avatar/123.png.txt"])
def test_unknown_suffix_is_invalid_format(path):
    assert classify_path(path).kind is RouteKind.INVALID_FORMAT


@pytest.mark.parametrize("path", ["/avatar", "/avatars/123.png", "/health", "/AVATAR/1.png", ""])
def test_other_paths_are_not_found(path):
    assert classify_path(path).kind is RouteKind.NOT_FOUND


def test_id_is_not_validated_when_classifying():
    target = classify_path("/avatar/notanumber.json")

    assert target.kind is RouteKind.AVATAR_JSON
    assert target.user_id == "notanumber"


def test_only_the_last_suffix_counts():
    assert classify_path("/avatar/1.json.png") == RouteTarget(RouteKind.AVATAR_IMAGE, "1.json")
