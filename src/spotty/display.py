"""
Display - Renders search results, playback state and profiles with rich.
"""

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from .spotify_client import Album, Playlist, SearchItem, Track, UserProfile

console = Console()


def format_duration(duration_ms: int) -> str:
    """Format milliseconds as m:ss."""
    seconds = max(duration_ms, 0) // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


def describe(item: SearchItem) -> str:
    """One-line description of a search result."""
    if isinstance(item, Track):
        return f"{item.name} by {item.artist}"
    if isinstance(item, Album):
        return f"{item.name} by {item.artist} (album)"
    return f"{item.name} by {item.owner} (playlist)"


def print_tracks(tracks: Sequence[Track], details: bool = False):
    table = Table(title="Tracks")
    table.add_column("#", style="bold")
    table.add_column("Name", style="green")
    table.add_column("Artist", style="yellow")
    table.add_column("Duration", style="magenta")
    if details:
        table.add_column("Album", style="cyan")
        table.add_column("Released")
        table.add_column("Popularity")
        table.add_column("URI", style="blue")

    for i, track in enumerate(tracks, 1):
        row = [
            str(i),
            escape(track.name),
            escape(track.artist),
            format_duration(track.duration_ms),
        ]
        if details:
            row += [
                escape(track.album),
                track.release_date or "-",
                "-" if track.popularity is None else str(track.popularity),
                track.uri,
            ]
        table.add_row(*row)

    console.print(table)


def print_albums(albums: Sequence[Album], details: bool = False):
    table = Table(title="Albums")
    table.add_column("#", style="bold")
    table.add_column("Name", style="green")
    table.add_column("Artist", style="yellow")
    table.add_column("Tracks", style="magenta")
    if details:
        table.add_column("Released")
        table.add_column("URI", style="blue")

    for i, album in enumerate(albums, 1):
        row = [str(i), escape(album.name), escape(album.artist), str(album.total_tracks)]
        if details:
            row += [album.release_date or "-", album.uri]
        table.add_row(*row)

    console.print(table)


def print_playlists(playlists: Sequence[Playlist], details: bool = False):
    table = Table(title="Playlists")
    table.add_column("#", style="bold")
    table.add_column("Name", style="green")
    table.add_column("Owner", style="yellow")
    table.add_column("Tracks", style="magenta")
    if details:
        table.add_column("Description")
        table.add_column("URI", style="blue")

    for i, playlist in enumerate(playlists, 1):
        row = [str(i), escape(playlist.name), escape(playlist.owner), str(playlist.total_tracks)]
        if details:
            row += [escape(playlist.description or "-"), playlist.uri]
        table.add_row(*row)

    console.print(table)


def print_results(search_type: str, items: Sequence[SearchItem], details: bool = False):
    """Print a numbered table for the given kind of results."""
    printers = {
        "track": print_tracks,
        "album": print_albums,
        "playlist": print_playlists,
    }
    printers[search_type](items, details)


def print_now_playing(item: SearchItem):
    console.print(f"[green]Now playing: {escape(describe(item))}[/green]")


def print_profile(profile: UserProfile):
    """Print a user profile in a panel."""
    lines = [
        f"[bold]{escape(profile.display_name or profile.id)}[/bold]",
        f"ID: {profile.id}",
        f"Followers: {profile.followers}",
        f"URI: {profile.uri}",
    ]
    if profile.url:
        lines.append(f"URL: {profile.url}")
    console.print(Panel("\n".join(lines), title="User Profile", style="cyan"))
