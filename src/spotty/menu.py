"""
InteractiveMenu - Numbered terminal menu for searching and playing.
"""

import logging
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.markup import escape

from .player import read_line
from .search import choose_and_play, run_search
from .spotify_client import SearchItem, SpotifyClient

console = Console()
logger = logging.getLogger(__name__)

MAIN_MENU = """\
[bold]1[/bold]  Search tracks
[bold]2[/bold]  Search albums
[bold]3[/bold]  Search playlists
[bold]4[/bold]  Browse last results
[bold]5[/bold]  Stop playback
[bold]0[/bold]  Quit"""

SEARCH_CHOICES = {"1": "track", "2": "album", "3": "playlist"}


class MenuState(Enum):
    MAIN_MENU = "main_menu"
    SEARCH_PROMPT = "search_prompt"
    RESULTS_LIST = "results_list"
    QUIT = "quit"


class InteractiveMenu:
    """
    Runs the menu loop until the user quits.

    Each state handler blocks on one line of input and returns the next
    state. The Playing state is handled inside the results list by the
    player prompt.
    """

    def __init__(
        self,
        client: SpotifyClient,
        keep_playing: bool = False,
        details: bool = False,
        limit: int = 5
    ):
        self.client = client
        self.keep_playing = keep_playing
        self.details = details
        self.limit = limit
        self.state = MenuState.MAIN_MENU
        self.search_type: Optional[str] = None
        self.results: list[SearchItem] = []

    def set_keep_playing(self, keep_playing: bool):
        self.keep_playing = keep_playing

    def run(self):
        console.print(Panel("Spotty - search and play Spotify from your terminal", style="cyan"))
        handlers = {
            MenuState.MAIN_MENU: self._main_menu,
            MenuState.SEARCH_PROMPT: self._search_prompt,
            MenuState.RESULTS_LIST: self._results_list,
        }
        while self.state is not MenuState.QUIT:
            logger.debug("Menu state: %s", self.state.value)
            self.state = handlers[self.state]()
        console.print("[green]Goodbye![/green]")

    def _main_menu(self) -> MenuState:
        console.print(Panel(MAIN_MENU, title="Main Menu"))
        choice = read_line("[cyan]Choose an option: [/cyan]")
        if choice is None or choice == "0":
            return MenuState.QUIT

        if choice in SEARCH_CHOICES:
            self.search_type = SEARCH_CHOICES[choice]
            return MenuState.SEARCH_PROMPT

        if choice == "4":
            if not self.results:
                console.print("[yellow]No results yet. Run a search first.[/yellow]")
                return MenuState.MAIN_MENU
            return MenuState.RESULTS_LIST

        if choice == "5":
            if self.client.stop_playback():
                console.print("[green]Playback stopped.[/green]")
            return MenuState.MAIN_MENU

        console.print(f"[red]Invalid option: {escape(choice)}[/red]")
        return MenuState.MAIN_MENU

    def _search_prompt(self) -> MenuState:
        query = read_line(f"[cyan]Enter {self.search_type} search query: [/cyan]")
        if query is None:
            return MenuState.QUIT
        if not query:
            console.print("[red]Error: missing search query[/red]")
            return MenuState.MAIN_MENU

        artist = None
        if self.search_type == "track":
            artist = read_line("[cyan]Artist (optional): [/cyan]")
            if artist is None:
                return MenuState.QUIT

        items = run_search(
            self.client, self.search_type, query, artist or None, self.limit
        )
        if not items:
            console.print(f"[yellow]No {self.search_type}s found.[/yellow]")
            return MenuState.MAIN_MENU

        self.results = items
        return MenuState.RESULTS_LIST

    def _results_list(self) -> MenuState:
        quit_requested = choose_and_play(
            self.client,
            self.search_type,
            self.results,
            self.details,
            self.keep_playing,
        )
        return MenuState.QUIT if quit_requested else MenuState.MAIN_MENU
