"""
Configuration - Reads Spotify credentials and OAuth settings from the environment.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

CLIENT_ID_VAR = "SPOTIFY_ID"
CLIENT_SECRET_VAR = "SPOTIFY_SECRET"
REDIRECT_URI_VAR = "SPOTIFY_REDIRECT_URI"
CACHE_PATH_VAR = "SPOTIFY_CACHE_PATH"

DEFAULT_REDIRECT_URI = "http://localhost:8888/callback"
DASHBOARD_URL = "https://developer.spotify.com/dashboard/"

SCOPES = "user-read-playback-state user-modify-playback-state"


@dataclass(frozen=True)
class Settings:
    """Settings needed to open an authenticated Spotify session."""
    client_id: str
    client_secret: str
    redirect_uri: str = DEFAULT_REDIRECT_URI
    cache_path: Optional[str] = None
    scope: str = SCOPES


def missing_credentials(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Return the names of the required credential variables that are unset."""
    environ = os.environ if environ is None else environ
    return [
        name for name in (CLIENT_ID_VAR, CLIENT_SECRET_VAR)
        if not environ.get(name)
    ]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Settings object

    Raises:
        KeyError: If a required credential variable is missing
    """
    environ = os.environ if environ is None else environ
    missing = missing_credentials(environ)
    if missing:
        raise KeyError(", ".join(missing))

    return Settings(
        client_id=environ[CLIENT_ID_VAR],
        client_secret=environ[CLIENT_SECRET_VAR],
        redirect_uri=environ.get(REDIRECT_URI_VAR) or DEFAULT_REDIRECT_URI,
        cache_path=environ.get(CACHE_PATH_VAR) or None,
    )
