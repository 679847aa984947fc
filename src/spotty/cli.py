"""
CLI - Command-line interface for Spotty.
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import (
    CLIENT_ID_VAR,
    CLIENT_SECRET_VAR,
    DASHBOARD_URL,
    DEFAULT_REDIRECT_URI,
    load_settings,
    missing_credentials,
)
from .display import print_profile
from .log import setup_logging
from .menu import InteractiveMenu
from .search import SEARCH_TYPES, search, search_with_menu
from .spotify_client import SpotifyClient

console = Console()
err_console = Console(stderr=True)

RULE = "=" * 65

EXAMPLES = """\b
Examples:
  spotty -t track -q "Bohemian Rhapsody"
  spotty -t track -q "Bohemian Rhapsody" -a "Queen"
  spotty -t album -q "Dark Side of the Moon" -l 3
  spotty -t playlist -q "workout" -d
  spotty -i
  spotty -q "Bohemian Rhapsody" -r
  spotty -q "Bohemian Rhapsody" -r -k
  spotty -q "Bohemian Rhapsody" -p
  spotty -s
  spotty -u spotify
"""


def validate_credentials() -> bool:
    """Check if Spotify credentials are set, explaining how to set them if not."""
    missing = missing_credentials()
    if not missing:
        return True

    lines = [RULE, "ERROR: Spotify API credentials not properly configured", RULE]
    lines += [f"Missing {name} environment variable" for name in missing]
    lines += [
        "",
        "To set up your credentials:",
        f"1. Go to {DASHBOARD_URL}",
        "2. Log in and create a new app",
        f"3. Set the redirect URI to {DEFAULT_REDIRECT_URI} in your app settings",
        "4. Set these environment variables with your credentials:",
        f"   export {CLIENT_ID_VAR}=your_client_id",
        f"   export {CLIENT_SECRET_VAR}=your_client_secret",
        RULE,
    ]
    console.print("\n".join(lines), style="red", markup=False, highlight=False)
    return False


def usage_error(ctx: click.Context, message: str):
    """Print a validation error followed by the usage text."""
    err_console.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    click.echo(ctx.get_help(), err=True)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EXAMPLES,
)
@click.version_option(version=__version__, prog_name="spotty")
@click.option(
    "-t", "--type", "search_type",
    default="track",
    show_default=True,
    help="Type of search: track, album, or playlist"
)
@click.option("-q", "--query", default="", help="Search query")
@click.option(
    "-a", "--artist",
    default="",
    help="Artist name to filter results (only for track search)"
)
@click.option(
    "-l", "--limit",
    default=5,
    show_default=True,
    type=int,
    help="Number of results to display"
)
@click.option(
    "-d", "--details",
    is_flag=True,
    help="Show detailed information about the results"
)
@click.option(
    "-i", "--interactive",
    is_flag=True,
    help="Run in interactive mode with a menu interface"
)
@click.option(
    "-r", "--return-to-menu",
    is_flag=True,
    help="Return to the results menu after playing a selection"
)
@click.option(
    "-k", "--keep-playing",
    is_flag=True,
    help="Keep music playing when leaving the player prompt (with -r or -i)"
)
@click.option(
    "-p", "--auto-play",
    is_flag=True,
    help="Automatically play the first result and exit"
)
@click.option("-s", "--stop", is_flag=True, help="Stop the currently playing track")
@click.option("-u", "--user", default="", help="Spotify user ID to look up profile information")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    search_type: str,
    query: str,
    artist: str,
    limit: int,
    details: bool,
    interactive: bool,
    return_to_menu: bool,
    keep_playing: bool,
    auto_play: bool,
    stop: bool,
    user: str,
    verbose: bool
):
    """
    Spotty - Search and play Spotify from your terminal.

    Searches tracks, albums and playlists and controls playback on your
    active Spotify device. Requires SPOTIFY_ID and SPOTIFY_SECRET.
    """
    setup_logging(verbose)

    if not validate_credentials():
        sys.exit(1)

    spotify = SpotifyClient(load_settings())
    if not spotify.authenticate():
        ctx.exit(1)

    if user:
        profile = spotify.get_user_profile(user)
        if not profile:
            ctx.exit(1)
        print_profile(profile)
        return

    if stop:
        if not spotify.stop_playback():
            ctx.exit(1)
        console.print("[green]Playback stopped.[/green]")
        return

    if interactive:
        menu = InteractiveMenu(spotify, details=details, limit=limit)
        menu.set_keep_playing(keep_playing)
        menu.run()
        return

    if search_type not in SEARCH_TYPES:
        usage_error(
            ctx,
            f"invalid search type '{search_type}'. Must be one of: {', '.join(SEARCH_TYPES)}"
        )
        return

    if not query:
        usage_error(ctx, "missing search query")
        return

    artist_filter: Optional[str] = artist or None
    if return_to_menu:
        search_with_menu(
            spotify, search_type, query, artist_filter, limit,
            details=details, keep_playing=keep_playing, auto_play=auto_play
        )
        return

    if keep_playing:
        console.print(
            "[yellow]Warning: -k/--keep-playing only applies with -r or -i; "
            "auto-played results always keep playing.[/yellow]"
        )

    found = search(
        spotify, search_type, query, artist_filter, limit,
        details=details, auto_play=auto_play
    )
    if auto_play and not found:
        ctx.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
