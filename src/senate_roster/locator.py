"""Find the roster table among all tables on a page.

Detection is an ordered chain of strategies.  Each strategy is a pure
function ``(soup) -> Tag | None``; :func:`locate_roster_table` runs them in
priority order and returns the first hit along with the strategy's name.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import NamedTuple

from bs4 import BeautifulSoup, Tag

from .config import DEFAULT_TABLE_MARKER
from .errors import TableNotFoundError

LOGGER = logging.getLogger(__name__)

# Each group needs at least one header containing one of its keywords.
NAME_HEADER_KEYWORDS: tuple[str, ...] = ("senator", "name")
STATE_HEADER_KEYWORDS: tuple[str, ...] = ("state",)
TENURE_HEADER_KEYWORDS: tuple[str, ...] = ("assumed office", "since", "term")

# Literal (case-sensitive) tokens for the full-text fallback.
FULL_TEXT_TOKENS: tuple[str, ...] = ("Senator", "State", "Party")


class TableStrategy(NamedTuple):
    name: str
    find: Callable[[BeautifulSoup], Tag | None]


def _any_header_matches(headers: list[str], keywords: Sequence[str]) -> bool:
    return any(k in h for h in headers for k in keywords)


def table_header_texts(table: Tag) -> list[str]:
    """Every ``<th>`` text in *table*, lower-cased and trimmed."""
    return [th.get_text(" ", strip=True).lower() for th in table.find_all("th")]


def has_roster_headers(table: Tag) -> bool:
    headers = table_header_texts(table)
    if not headers:
        return False
    return (
        _any_header_matches(headers, NAME_HEADER_KEYWORDS)
        and _any_header_matches(headers, STATE_HEADER_KEYWORDS)
        and _any_header_matches(headers, TENURE_HEADER_KEYWORDS)
    )


def marked_tables(soup: BeautifulSoup, marker: str = DEFAULT_TABLE_MARKER) -> list[Tag]:
    """Tables carrying every CSS class in *marker*, in document order."""
    classes = marker.split()
    if not classes:
        return soup.find_all("table")
    selector = "table" + "".join(f".{c}" for c in classes)
    return soup.select(selector)


def find_by_header_keywords(
    soup: BeautifulSoup, marker: str = DEFAULT_TABLE_MARKER
) -> Tag | None:
    """First marked table whose headers name a senator, a state and a tenure."""
    for table in marked_tables(soup, marker):
        if has_roster_headers(table):
            return table
    return None


def find_by_full_text(soup: BeautifulSoup) -> Tag | None:
    """First table (marker or not) mentioning Senator, State and Party."""
    for table in soup.find_all("table"):
        text = table.get_text(" ")
        if all(token in text for token in FULL_TEXT_TOKENS):
            return table
    return None


def default_strategies(marker: str = DEFAULT_TABLE_MARKER) -> list[TableStrategy]:
    return [
        TableStrategy(
            "header_keywords",
            lambda soup: find_by_header_keywords(soup, marker),
        ),
        TableStrategy("full_text", find_by_full_text),
    ]


def locate_roster_table(
    soup: BeautifulSoup,
    strategies: Sequence[TableStrategy] | None = None,
) -> tuple[Tag, str]:
    """Return ``(table, strategy_name)`` for the first strategy that succeeds.

    Raises :class:`TableNotFoundError` when every strategy comes up empty.
    """
    chain = list(strategies) if strategies is not None else default_strategies()
    for strategy in chain:
        table = strategy.find(soup)
        if table is not None:
            LOGGER.info("Roster table located via %s strategy.", strategy.name)
            return table, strategy.name
        LOGGER.debug("Table strategy %s found nothing.", strategy.name)
    raise TableNotFoundError([s.name for s in chain])
