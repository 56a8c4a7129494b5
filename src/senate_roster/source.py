"""Fetch and parse the source page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter

from .config import DEFAULT_USER_AGENT
from .errors import SourceFetchError

LOGGER = logging.getLogger(__name__)


@dataclass
class PageFetcher:
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 20.0
    _session: requests.Session = field(default_factory=requests.Session, repr=False)

    def __post_init__(self) -> None:
        """Mount a pooled adapter.  One attempt per fetch: no retries."""
        adapter = HTTPAdapter(max_retries=0, pool_connections=2, pool_maxsize=2)
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)
        self._session.headers["User-Agent"] = self.user_agent

    def fetch(self, url: str) -> str:
        """GET *url* and return the body text.

        Raises :class:`SourceFetchError` for connection errors, timeouts and
        non-2xx responses.
        """
        LOGGER.info("Fetching %s", url)
        try:
            resp = self._session.get(url, timeout=self.timeout_seconds)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise SourceFetchError(url, str(exc)) from exc
        LOGGER.debug("Fetched %s (%d bytes)", url, len(resp.text))
        return resp.text

    def close(self) -> None:
        self._session.close()


def parse_document(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


@dataclass
class LocalFileSource:
    """Serve a saved copy of the page from disk, ignoring the URL."""

    path: Path

    def fetch(self, url: str) -> str:
        LOGGER.info("Reading %s (instead of %s)", self.path, url)
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceFetchError(str(self.path), str(exc)) from exc
