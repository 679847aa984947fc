"""
Tests for the search flows and the results selection loop.
"""
from spotipy.exceptions import SpotifyException

from spotty.search import choose_and_play, run_search, search, search_with_menu

from conftest import make_album, search_response


class TestRunSearch:
    def test_dispatches_by_type(self, client, spotify):
        spotify.search.return_value = search_response("album", [make_album(1)])
        items = run_search(client, "album", "dark side", artist="ignored", limit=2)
        assert items[0].name == "Record 1"
        spotify.search.assert_called_once_with(q="dark side", limit=2, type="album")


class TestSearch:
    def test_prints_results(self, client, capsys):
        assert search(client, "track", "song") is True
        out = capsys.readouterr().out
        assert "Song 1" in out
        assert "Song 3" in out
        assert "3:01" in out

    def test_no_results(self, client, spotify, capsys):
        spotify.search.return_value = search_response("track", [])
        assert search(client, "track", "nothing") is False
        assert "No tracks found" in capsys.readouterr().out

    def test_does_not_play_without_auto_play(self, client, spotify):
        search(client, "track", "song")
        spotify.start_playback.assert_not_called()

    def test_auto_play_plays_first_result_once(self, client, spotify, capsys):
        assert search(client, "track", "song", auto_play=True) is True
        spotify.start_playback.assert_called_once_with(
            device_id="dev1", uris=["spotify:track:t1"]
        )
        spotify.pause_playback.assert_not_called()
        assert "Now playing: Song 1 by Artist 1" in capsys.readouterr().out

    def test_auto_play_failure(self, client, spotify):
        spotify.start_playback.side_effect = SpotifyException(404, -1, "No active device")
        assert search(client, "track", "song", auto_play=True) is False

    def test_search_error_abandons_action(self, client, spotify, capsys):
        spotify.search.side_effect = SpotifyException(500, -1, "Server error")
        assert search(client, "track", "song", auto_play=True) is False
        spotify.start_playback.assert_not_called()
        assert "Track search failed" in capsys.readouterr().out


class TestChooseAndPlay:
    def test_select_play_then_go_back(self, client, spotify, feed_input):
        items = client.search_tracks("song")
        feed_input("2", "", "0")
        assert choose_and_play(client, "track", items) is False
        spotify.start_playback.assert_called_once_with(
            device_id="dev1", uris=["spotify:track:t2"]
        )
        spotify.pause_playback.assert_called_once_with()

    def test_keep_playing_leaves_playback_running(self, client, spotify, feed_input):
        items = client.search_tracks("song")
        feed_input("1", "", "0")
        choose_and_play(client, "track", items, keep_playing=True)
        spotify.pause_playback.assert_not_called()

    def test_quit_from_player(self, client, spotify, feed_input):
        items = client.search_tracks("song")
        feed_input("1", "q")
        assert choose_and_play(client, "track", items) is True

    def test_invalid_selection_reprompts(self, client, spotify, feed_input, capsys):
        items = client.search_tracks("song")
        feed_input("9", "abc", "0")
        choose_and_play(client, "track", items)
        out = capsys.readouterr().out
        assert "Invalid selection: 9" in out
        assert "Invalid selection: abc" in out
        spotify.start_playback.assert_not_called()

    def test_eof_leaves(self, client, spotify, feed_input):
        feed_input()
        assert choose_and_play(client, "track", client.search_tracks("song")) is False


class TestSearchWithMenu:
    def test_prompts_instead_of_auto_selecting(self, client, spotify, feed_input):
        feed_input("3", "", "0")
        assert search_with_menu(client, "track", "song") is True
        spotify.start_playback.assert_called_once_with(
            device_id="dev1", uris=["spotify:track:t3"]
        )

    def test_auto_play_then_results(self, client, spotify, feed_input):
        feed_input("", "0")
        search_with_menu(client, "track", "song", auto_play=True)
        spotify.start_playback.assert_called_once_with(
            device_id="dev1", uris=["spotify:track:t1"]
        )
        spotify.pause_playback.assert_called_once_with()

    def test_no_results(self, client, spotify, feed_input):
        spotify.search.return_value = search_response("track", [])
        feed_input()
        assert search_with_menu(client, "track", "nothing") is False
