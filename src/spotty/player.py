"""
Player - Blocking now-playing prompt shown after a result starts playing.
"""

import logging
from typing import Optional

from rich.console import Console

from .display import print_now_playing
from .spotify_client import SearchItem, SpotifyClient

console = Console()
logger = logging.getLogger(__name__)


def read_line(prompt: str) -> Optional[str]:
    """Read one line from the terminal, or None when input is closed."""
    try:
        return console.input(prompt).strip()
    except EOFError:
        return None


def player_prompt(client: SpotifyClient, item: SearchItem, keep_playing: bool) -> bool:
    """
    Wait on the now-playing screen until the user leaves it.

    Playback is stopped on the way out unless keep_playing is set.

    Returns:
        True if the user asked to quit the program
    """
    print_now_playing(item)
    answer = read_line("[cyan]Press Enter to go back, or q to quit: [/cyan]")
    quit_requested = answer is None or answer.lower() == "q"

    if keep_playing:
        logger.debug("Leaving playback running")
    else:
        client.stop_playback()
    return quit_requested
