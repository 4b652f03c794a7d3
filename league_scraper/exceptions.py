# league_scraper/exceptions.py
"""
Errors raised by the scraper. Only ReconnectionTimeoutError may abort a season
outright; the rest are contained at the gameweek or season level and end up
as Issue records plus the season's error flag.
"""

import requests
from selenium.common.exceptions import TimeoutException

from league_scraper.config import NETWORK_ERROR_MARKERS


class ScraperError(Exception):
    """Base class for every error raised by the scraper itself."""


class ReconnectionTimeoutError(ScraperError):
    """The network did not come back within the reconnection budget."""

    def __init__(self, waited, max_wait):
        self.waited = waited
        self.max_wait = max_wait
        super().__init__(
            f"Network reconnection timeout exceeded: waited {waited:.0f}s "
            f"(limit {max_wait:.0f}s)"
        )


class NavigationError(ScraperError):
    """The navigator could not make the page show gameweek `target`."""

    def __init__(self, target, current=None, reason=""):
        self.target = target
        self.current = current
        self.reason = reason
        message = f"Could not navigate to gameweek {target}"
        if current is not None:
            message += f" (page shows gameweek {current})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class StructuralError(ScraperError):
    """An expected element is missing or a row is malformed."""

    def __init__(self, reason, details=None):
        self.reason = reason
        self.details = details or {}
        super().__init__(reason)


class DataIntegrityError(ScraperError):
    """
    Duplicate match signatures survived into the verified season.
    `duplicates` holds one {gameweek, matchIndex, match} record per repeat.
    """

    def __init__(self, duplicates):
        self.duplicates = duplicates
        super().__init__(
            f"Duplicate matches detected: {len(duplicates)} instances. "
            "See the verification issue log for details."
        )


def is_recoverable_network_error(error):
    """True for connectivity loss, name resolution failure or timeouts."""
    if isinstance(error, (TimeoutException, requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(error, ScraperError):
        return False
    message = str(error)
    return any(marker in message for marker in NETWORK_ERROR_MARKERS)
