"""
Logging setup - Routes diagnostics through rich's log handler.
"""

import logging

from rich.logging import RichHandler

NOISY_LOGGERS = ("spotipy", "urllib3", "requests")


def setup_logging(verbose: bool = False):
    """Configure the root logger; DEBUG when verbose, WARNING otherwise."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if verbose else logging.WARNING)
