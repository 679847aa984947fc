"""
Spotty - Search and play Spotify from the command line.
"""

__version__ = "1.0.0"

from .spotify_client import SpotifyClient
from .menu import InteractiveMenu

__all__ = ["SpotifyClient", "InteractiveMenu"]
