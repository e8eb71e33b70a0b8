import pytest

from gameserve.utils.exceptions import InvalidPathError
from gameserve.utils.url import host_from_header, normalize_file_path, parse_game_path, slug_from_subdomain

RESERVED = {"www", "api", "play"}


def test_normalize_file_path_cleans_segments():
    assert normalize_file_path("assets//./sprites/hero.png") == "assets/sprites/hero.png"
    assert normalize_file_path("assets\\app.js") == "assets/app.js"
    assert normalize_file_path("my level.json") == "my level.json"
    # The router has already decoded the path once
    assert normalize_file_path("a%20b.txt") == "a%20b.txt"


@pytest.mark.parametrize("raw", [None, "", "/", "./"])
def test_normalize_file_path_empty_means_entrypoint(raw):
    assert normalize_file_path(raw) is None


@pytest.mark.parametrize("raw", ["../secrets.json", "assets/../../other/index.html", "assets\\..\\x"])
def test_normalize_file_path_rejects_traversal(raw):
    with pytest.raises(InvalidPathError):
        normalize_file_path(raw)


def test_parse_game_path():
    assert parse_game_path("space-run", "assets/app.js") == ("space-run", "assets/app.js")
    assert parse_game_path("space-run", None) == ("space-run", None)


@pytest.mark.parametrize("identifier", [None, "", "  ", "a/b"])
def test_parse_game_path_requires_identifier(identifier):
    with pytest.raises(InvalidPathError):
        parse_game_path(identifier, "index.html")


def test_host_from_header():
    assert host_from_header("Games.Example.com:8443") == "games.example.com"
    assert host_from_header("games.example.com.") == "games.example.com"
    assert host_from_header("[::1]:8000") == "[::1]"
    assert host_from_header(None) == ""


def test_slug_from_subdomain():
    base = "play.playcraft.games"
    assert slug_from_subdomain("space-run.play.playcraft.games", base, RESERVED) == "space-run"
    assert slug_from_subdomain("www.play.playcraft.games", base, RESERVED) is None
    assert slug_from_subdomain("a.b.play.playcraft.games", base, RESERVED) is None
    assert slug_from_subdomain("playcraft.games", base, RESERVED) is None
    assert slug_from_subdomain("space-run.playXplaycraft.games", base, RESERVED) is None
