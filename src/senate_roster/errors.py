"""Exception hierarchy for roster extraction and the read API."""

from __future__ import annotations


class RosterError(Exception):
    """Base class for every error raised by this package."""


class SourceFetchError(RosterError):
    """The source page could not be retrieved (network error or bad status)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class TableNotFoundError(RosterError):
    """No table on the page looks like the senator roster."""

    def __init__(self, strategies: list[str] | None = None) -> None:
        tried = ", ".join(strategies or [])
        message = "Could not find senator table on page"
        if tried:
            message += f" (tried: {tried})"
        super().__init__(message)
        self.strategies = list(strategies or [])


class InvalidDateError(RosterError, ValueError):
    """A caller supplied a date that is not a ``YYYY-MM-DD`` calendar date."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid date {value!r}. Use YYYY-MM-DD")
        self.value = value
