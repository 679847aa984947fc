"""
Shared fixtures: a mocked spotipy session and canned API payloads.
"""
from unittest.mock import MagicMock

import pytest

from spotty.config import Settings
from spotty.spotify_client import SpotifyClient


def make_track(n: int) -> dict:
    return {
        "id": f"t{n}",
        "name": f"Song {n}",
        "artists": [{"name": f"Artist {n}"}],
        "album": {"name": f"Album {n}", "release_date": "1975-10-31"},
        "duration_ms": 180000 + n * 1000,
        "uri": f"spotify:track:t{n}",
        "popularity": 50 + n,
    }


def make_album(n: int) -> dict:
    return {
        "id": f"a{n}",
        "name": f"Record {n}",
        "artists": [{"name": f"Band {n}"}],
        "total_tracks": 10 + n,
        "uri": f"spotify:album:a{n}",
        "release_date": "1973-03-01",
    }


def make_playlist(n: int) -> dict:
    return {
        "id": f"p{n}",
        "name": f"Mix {n}",
        "owner": {"id": f"user{n}", "display_name": f"Owner {n}"},
        "tracks": {"total": 20 + n},
        "uri": f"spotify:playlist:p{n}",
        "description": "",
    }


def search_response(kind: str, items: list) -> dict:
    return {f"{kind}s": {"items": items}}


@pytest.fixture
def settings():
    return Settings(client_id="id", client_secret="secret")


@pytest.fixture
def spotify():
    mock = MagicMock()
    mock.devices.return_value = {
        "devices": [{"id": "dev1", "name": "Laptop", "is_active": True}]
    }
    mock.search.return_value = search_response("track", [make_track(i) for i in range(1, 4)])
    return mock


@pytest.fixture
def client(settings, spotify):
    return SpotifyClient(settings, spotify=spotify)


@pytest.fixture
def feed_input(monkeypatch):
    """Answer terminal prompts from a list; EOF once it runs out."""
    def feed(*lines):
        answers = iter(lines)

        def fake_input(*args):
            try:
                return next(answers)
            except StopIteration:
                raise EOFError
        monkeypatch.setattr("builtins.input", fake_input)
    return feed
