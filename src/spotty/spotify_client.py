"""
SpotifyClient - Handles Spotify API authentication, search and playback control.
"""

import logging
import time
from typing import Optional, Union
from dataclasses import dataclass

import requests
import spotipy
from spotipy.cache_handler import CacheFileHandler, MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError
from rich.console import Console

from .config import Settings

console = Console()
logger = logging.getLogger(__name__)

MAX_SEARCH_LIMIT = 50

API_ERRORS = (
    spotipy.exceptions.SpotifyException,
    SpotifyOauthError,
    requests.exceptions.RequestException,
)


@dataclass(frozen=True)
class Track:
    """A track returned by a search."""
    id: str
    name: str
    artists: tuple[str, ...]
    album: str
    duration_ms: int
    uri: str
    popularity: Optional[int] = None
    release_date: Optional[str] = None

    @property
    def artist(self) -> str:
        return ", ".join(self.artists)


@dataclass(frozen=True)
class Album:
    """An album returned by a search."""
    id: str
    name: str
    artists: tuple[str, ...]
    total_tracks: int
    uri: str
    release_date: Optional[str] = None

    @property
    def artist(self) -> str:
        return ", ".join(self.artists)


@dataclass(frozen=True)
class Playlist:
    """A playlist returned by a search."""
    id: str
    name: str
    owner: str
    total_tracks: int
    uri: str
    description: Optional[str] = None


@dataclass(frozen=True)
class UserProfile:
    """Public profile of a Spotify user."""
    id: str
    display_name: Optional[str]
    followers: int
    uri: str
    url: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """Bearer token currently held by the client."""
    access_token: str
    expires_at: int

    @property
    def is_expired(self) -> bool:
        return self.expires_at <= int(time.time())


SearchItem = Union[Track, Album, Playlist]


class SpotifyClient:
    """
    Wraps an authenticated spotipy session.

    API failures are reported on the console and turned into empty results;
    nothing is retried.
    """

    def __init__(self, settings: Settings, spotify: Optional[spotipy.Spotify] = None):
        """
        Initialize the Spotify client.

        Args:
            settings: Credentials and OAuth settings
            spotify: An already authenticated spotipy session (mainly for tests)
        """
        self.settings = settings
        self._auth_manager: Optional[SpotifyOAuth] = None
        self._spotify = spotify

    def authenticate(self) -> bool:
        """
        Authenticate with the Spotify API using the authorization code flow.

        The token lives in memory unless a cache path is configured.

        Returns:
            True if authentication was successful, False otherwise.
        """
        if self.settings.cache_path:
            cache_handler = CacheFileHandler(cache_path=self.settings.cache_path)
        else:
            cache_handler = MemoryCacheHandler()

        try:
            self._auth_manager = SpotifyOAuth(
                client_id=self.settings.client_id,
                client_secret=self.settings.client_secret,
                redirect_uri=self.settings.redirect_uri,
                scope=self.settings.scope,
                cache_handler=cache_handler,
            )
            self._spotify = spotipy.Spotify(auth_manager=self._auth_manager)
            user = self._spotify.current_user()
            logger.debug("Authenticated as %s", user.get("id"))
            return True
        except API_ERRORS as e:
            console.print(f"[red]Authentication failed: {e}[/red]")
            return False

    @property
    def session(self) -> Optional[Session]:
        """The current bearer token, refreshed by spotipy when it expires."""
        if not self._auth_manager:
            return None
        token_info = self._auth_manager.cache_handler.get_cached_token()
        if not token_info:
            return None
        return Session(
            access_token=token_info["access_token"],
            expires_at=int(token_info.get("expires_at", 0)),
        )

    def _require_session(self) -> bool:
        if not self._spotify:
            console.print("[red]Not authenticated. Call authenticate() first.[/red]")
            return False
        return True

    def _search(self, query: str, search_type: str, limit: int) -> list[dict]:
        limit = max(1, min(limit, MAX_SEARCH_LIMIT))
        logger.debug("Searching %ss for %r (limit %d)", search_type, query, limit)
        results = self._spotify.search(q=query, limit=limit, type=search_type)
        items = (results.get(f"{search_type}s") or {}).get("items") or []
        return [item for item in items if item][:limit]

    def search_tracks(
        self,
        query: str,
        artist: Optional[str] = None,
        limit: int = 5
    ) -> list[Track]:
        """
        Search for tracks, optionally restricted to an artist.

        Args:
            query: Track name or free text
            artist: Artist name filter
            limit: Maximum number of results

        Returns:
            List of Track objects
        """
        if not self._require_session():
            return []

        q = f"track:{query} artist:{artist}" if artist else query
        try:
            return [self._parse_track(item) for item in self._search(q, "track", limit)]
        except API_ERRORS as e:
            console.print(f"[red]Track search failed: {e}[/red]")
            return []

    def search_albums(self, query: str, limit: int = 5) -> list[Album]:
        """Search for albums."""
        if not self._require_session():
            return []

        try:
            return [self._parse_album(item) for item in self._search(query, "album", limit)]
        except API_ERRORS as e:
            console.print(f"[red]Album search failed: {e}[/red]")
            return []

    def search_playlists(self, query: str, limit: int = 5) -> list[Playlist]:
        """Search for playlists."""
        if not self._require_session():
            return []

        try:
            return [
                self._parse_playlist(item)
                for item in self._search(query, "playlist", limit)
            ]
        except API_ERRORS as e:
            console.print(f"[red]Playlist search failed: {e}[/red]")
            return []

    def active_device_id(self) -> Optional[str]:
        """
        Pick the device playback commands should target.

        Returns:
            The active device ID, else the first available one, else None
        """
        if not self._require_session():
            return None

        try:
            devices = self._spotify.devices().get("devices") or []
        except API_ERRORS as e:
            console.print(f"[red]Failed to list devices: {e}[/red]")
            return None

        for device in devices:
            if device.get("is_active"):
                return device["id"]
        if devices:
            logger.debug("No active device, using %s", devices[0].get("name"))
            return devices[0]["id"]
        return None

    def play(self, item: SearchItem) -> bool:
        """
        Start playback of a search result on the user's device.

        Tracks are played by URI, albums and playlists as a context.

        Returns:
            True if playback was started
        """
        if not self._require_session():
            return False

        device_id = self.active_device_id()
        if not device_id:
            console.print(
                "[red]No playback device found. "
                "Open Spotify on one of your devices and try again.[/red]"
            )
            return False

        try:
            if isinstance(item, Track):
                self._spotify.start_playback(device_id=device_id, uris=[item.uri])
            else:
                self._spotify.start_playback(device_id=device_id, context_uri=item.uri)
            return True
        except API_ERRORS as e:
            console.print(f"[red]Failed to start playback: {e}[/red]")
            return False

    def stop_playback(self) -> bool:
        """Pause whatever is playing on the active device."""
        if not self._require_session():
            return False

        try:
            self._spotify.pause_playback()
            return True
        except API_ERRORS as e:
            console.print(f"[red]Failed to stop playback: {e}[/red]")
            return False

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Fetch the public profile of a user.

        Args:
            user_id: Spotify user ID

        Returns:
            UserProfile object or None if failed
        """
        if not self._require_session():
            return None

        try:
            user = self._spotify.user(user_id)
        except API_ERRORS as e:
            console.print(f"[red]Failed to fetch user profile: {e}[/red]")
            return None

        return UserProfile(
            id=user["id"],
            display_name=user.get("display_name"),
            followers=(user.get("followers") or {}).get("total") or 0,
            uri=user["uri"],
            url=(user.get("external_urls") or {}).get("spotify"),
        )

    def _parse_track(self, track: dict) -> Track:
        album = track.get("album") or {}
        return Track(
            id=track["id"],
            name=track["name"],
            artists=tuple(a["name"] for a in track.get("artists", [])),
            album=album.get("name", ""),
            duration_ms=track.get("duration_ms", 0),
            uri=track["uri"],
            popularity=track.get("popularity"),
            release_date=album.get("release_date"),
        )

    def _parse_album(self, album: dict) -> Album:
        return Album(
            id=album["id"],
            name=album["name"],
            artists=tuple(a["name"] for a in album.get("artists", [])),
            total_tracks=album.get("total_tracks", 0),
            uri=album["uri"],
            release_date=album.get("release_date"),
        )

    def _parse_playlist(self, playlist: dict) -> Playlist:
        owner = playlist.get("owner") or {}
        return Playlist(
            id=playlist["id"],
            name=playlist["name"],
            owner=owner.get("display_name") or owner.get("id", ""),
            total_tracks=(playlist.get("tracks") or {}).get("total", 0),
            uri=playlist["uri"],
            description=playlist.get("description") or None,
        )
