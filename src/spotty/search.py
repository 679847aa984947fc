"""
Search - Search flows: list results, auto-play, and the numbered selection loop.
"""

import logging
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .display import describe, print_now_playing, print_results
from .player import player_prompt, read_line
from .spotify_client import SearchItem, SpotifyClient

console = Console()
logger = logging.getLogger(__name__)

SEARCH_TYPES = ("track", "album", "playlist")


def run_search(
    client: SpotifyClient,
    search_type: str,
    query: str,
    artist: Optional[str] = None,
    limit: int = 5
) -> list[SearchItem]:
    """
    Dispatch a query to the search call matching the search type.

    The artist filter only applies to track searches.
    """
    console.print(f"\n[cyan]Searching {search_type}s for \"{escape(query)}\"...[/cyan]")
    if search_type == "track":
        return client.search_tracks(query, artist=artist, limit=limit)
    if search_type == "album":
        return client.search_albums(query, limit=limit)
    if search_type == "playlist":
        return client.search_playlists(query, limit=limit)
    raise ValueError(f"Unknown search type: {search_type}")


def search(
    client: SpotifyClient,
    search_type: str,
    query: str,
    artist: Optional[str] = None,
    limit: int = 5,
    details: bool = False,
    auto_play: bool = False
) -> bool:
    """
    Search, print the results and optionally play the first one.

    With auto_play the first result starts and is left playing.

    Returns:
        False if nothing was found or auto-play failed
    """
    items = run_search(client, search_type, query, artist, limit)
    if not items:
        console.print(f"[yellow]No {search_type}s found.[/yellow]")
        return False

    print_results(search_type, items, details)

    if auto_play:
        first = items[0]
        if not client.play(first):
            return False
        print_now_playing(first)
    return True


def choose_and_play(
    client: SpotifyClient,
    search_type: str,
    items: Sequence[SearchItem],
    details: bool = False,
    keep_playing: bool = False
) -> bool:
    """
    Show results and play whichever one the user picks, until they leave.

    Returns:
        True if the user asked to quit the program from the player prompt
    """
    while True:
        print_results(search_type, items, details)
        choice = read_line(
            f"[cyan]Select a {search_type} to play (1-{len(items)}), or 0 to go back: [/cyan]"
        )
        if choice is None or choice.lower() in ("0", "q", ""):
            return False

        if not choice.isdigit() or not 1 <= int(choice) <= len(items):
            console.print(f"[red]Invalid selection: {escape(choice)}[/red]")
            continue

        item = items[int(choice) - 1]
        logger.debug("Selected %s", describe(item))
        if not client.play(item):
            continue
        if player_prompt(client, item, keep_playing):
            return True


def search_with_menu(
    client: SpotifyClient,
    search_type: str,
    query: str,
    artist: Optional[str] = None,
    limit: int = 5,
    details: bool = False,
    keep_playing: bool = False,
    auto_play: bool = False
) -> bool:
    """
    Search and keep returning to the results for another selection.

    With auto_play the first result starts before the first prompt.

    Returns:
        False if nothing was found
    """
    items = run_search(client, search_type, query, artist, limit)
    if not items:
        console.print(f"[yellow]No {search_type}s found.[/yellow]")
        return False

    if auto_play and client.play(items[0]):
        if player_prompt(client, items[0], keep_playing):
            return True

    choose_and_play(client, search_type, items, details, keep_playing)
    return True
