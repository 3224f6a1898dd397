"""Exceptions raised by GWM."""

from __future__ import annotations


class SourceUnavailableError(FileNotFoundError):
    """The weather data file could not be opened.

    This is the only fatal condition while loading: malformed lines are
    reported and skipped, but a missing or unreadable source stops construction.
    """

    def __init__(self, path: str, reason: str = "cannot open file") -> None:
        super().__init__(f"Weather data source unavailable: {path} ({reason})")
        self.path = path
        self.reason = reason
