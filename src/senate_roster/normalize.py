"""Shared cell normalization utilities.

Centralizes the text, date, state and party clean-up applied to every roster
cell so the extractor, the link-recovery pass and the API all agree on formats.

**Date normalization:**
    Dates are converted to ISO ``YYYY-MM-DD``.  Handles the formats seen in
    the source tables:
    - ``January 3, 2021``  (full month name, the usual form)
    - ``Jan 3, 2021``      (abbreviated month)
    - ``2021-01-03``       (already ISO)
    - ``1/3/2021``         (MM/DD/YYYY)
    - ``3 January 2021``   (day-first)
    Footnote markers (``[1]``) and asides (``(appointed)``) are removed first.

**State normalization:**
    Full state names map to USPS two-letter codes.  Anything else passes
    through untouched; callers upper-case the result.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from .models import Party

LOGGER = logging.getLogger(__name__)

_RE_FOOTNOTE = re.compile(r"\[.*?\]")
_RE_PARENTHETICAL = re.compile(r"\(.*?\)")
_RE_WHITESPACE = re.compile(r"\s+")

# Tried in order; first match wins.
_DATE_FORMATS = [
    "%B %d, %Y",  # "January 3, 2021"
    "%b %d, %Y",  # "Jan 3, 2021"
    "%b. %d, %Y",  # "Jan. 3, 2021"
    "%Y-%m-%d",  # ISO
    "%m/%d/%Y",  # "1/3/2021"
    "%d %B %Y",  # "3 January 2021"
    "%d %b %Y",  # "3 Jan 2021"
    "%B %d %Y",  # "January 3 2021"
    "%B %Y",  # "January 2021" -> first of month
]

STATE_ABBREVIATIONS: dict[str, str] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
}

# Substring checks run before the exact abbreviations below.
_PARTY_KEYWORDS: tuple[tuple[str, Party], ...] = (
    ("democrat", Party.DEMOCRAT),
    ("republican", Party.REPUBLICAN),
    ("independent", Party.INDEPENDENT),
)

_PARTY_ABBREVIATIONS: dict[str, Party] = {
    "d": Party.DEMOCRAT,
    "dem": Party.DEMOCRAT,
    "r": Party.REPUBLICAN,
    "rep": Party.REPUBLICAN,
    "gop": Party.REPUBLICAN,
    "i": Party.INDEPENDENT,
    "ind": Party.INDEPENDENT,
}


def strip_footnotes(text: str) -> str:
    """Remove ``[...]`` reference markers and trim."""
    return _RE_FOOTNOTE.sub("", text).strip()


def clean_cell_text(raw: str | None) -> str:
    """Strip footnotes and parenthetical asides, collapse whitespace.

    Examples::

        >>> clean_cell_text("Chuck Schumer[a]")
        'Chuck Schumer'
        >>> clean_cell_text("Bernie Sanders (I)")
        'Bernie Sanders'
    """
    if not raw:
        return ""
    text = _RE_FOOTNOTE.sub("", raw)
    text = _RE_PARENTHETICAL.sub("", text)
    return _RE_WHITESPACE.sub(" ", text).strip()


def normalize_date(raw: str | None) -> str | None:
    """Normalize a date cell to ISO ``YYYY-MM-DD``.

    Returns ``None`` when the input is empty or matches none of the known
    formats; callers substitute their own default.  Never raises.

    Examples::

        >>> normalize_date("January 3, 2021[1]")
        '2021-01-03'
        >>> normalize_date("Jan 3, 2021 (appointed)")
        '2021-01-03'
        >>> normalize_date("not a date") is None
        True
    """
    if not raw or not isinstance(raw, str):
        return None

    text = clean_cell_text(raw)
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue

    LOGGER.debug("normalize_date: unparseable date %r", text)
    return None


def normalize_state(raw: str | None) -> str:
    """Map a full state name to its two-letter code.

    Text of two characters or fewer, and names not in the table, are returned
    unchanged (after footnote stripping).

    Examples::

        >>> normalize_state("California")
        'CA'
        >>> normalize_state("TX")
        'TX'
    """
    if not raw:
        return ""
    state = strip_footnotes(raw)
    if len(state) > 2:
        return STATE_ABBREVIATIONS.get(state.lower(), state)
    return state


def classify_party(party_text: str | None, row_hint: str | None = "") -> Party:
    """Classify free-text party labels into a :class:`Party`.

    *row_hint* is the row's ``class`` attribute (some tables colour rows by
    party).  Full party names found in either input win over the short
    abbreviations, which only match the party text exactly.

    Examples::

        >>> classify_party("Democratic Party", "")
        <Party.DEMOCRAT: 'Democrat'>
        >>> classify_party("R")
        <Party.REPUBLICAN: 'Republican'>
        >>> classify_party("xyz")
        <Party.UNKNOWN: 'Unknown'>
    """
    text = (party_text or "").strip().lower()
    hint = (row_hint or "").strip().lower()

    for keyword, party in _PARTY_KEYWORDS:
        if keyword in text or keyword in hint:
            return party

    return _PARTY_ABBREVIATIONS.get(text, Party.UNKNOWN)
