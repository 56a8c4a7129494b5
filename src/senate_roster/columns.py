"""Map roster fields to column positions from header text.

Each field is resolved by the first header containing one of its keywords.
Unmatched fields fall back to fixed positions (name 0, state 1, party 2,
assumed office second-to-last).  Those positional guesses are only a best
effort: on a table with missing or reworded headers they can attribute the
wrong column to a field, so every defaulted field is reported on the
:class:`~senate_roster.models.ColumnMap` and logged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import Tag

from .models import ColumnMap

LOGGER = logging.getLogger(__name__)

COLUMN_KEYWORDS: dict[str, tuple[str, ...]] = {
    "name": ("senator", "name"),
    "state": ("state",),
    "party": ("party",),
    "office_start": ("assumed office", "since", "took office", "term began"),
}


def header_texts(table: Tag) -> list[str]:
    """Header cell texts of *table*, lower-cased and trimmed.

    Uses the ``<thead>`` header cells plus those of the table's first row,
    without duplicates and in document order.
    """
    cells: list[Tag] = []
    seen: set[int] = set()

    thead = table.find("thead")
    if thead is not None:
        cells.extend(thead.find_all("th"))
    first_row = table.find("tr")
    if first_row is not None:
        cells.extend(first_row.find_all("th"))

    texts: list[str] = []
    for cell in cells:
        if id(cell) in seen:
            continue
        seen.add(id(cell))
        texts.append(cell.get_text(" ", strip=True).lower())
    return texts


def _find_index(headers: Sequence[str], keywords: Sequence[str]) -> int:
    for i, header in enumerate(headers):
        if any(k in header for k in keywords):
            return i
    return -1


def resolve_columns(headers: Sequence[str]) -> ColumnMap:
    """Resolve the four roster columns from normalized header texts."""
    headers = [h.strip().lower() for h in headers]
    positional = {
        "name": 0,
        "state": 1,
        "party": 2,
        "office_start": len(headers) - 2,
    }

    indices: dict[str, int] = {}
    defaulted: list[str] = []
    for field_name, keywords in COLUMN_KEYWORDS.items():
        index = _find_index(headers, keywords)
        if index == -1:
            index = positional[field_name]
            defaulted.append(field_name)
        indices[field_name] = index

    if defaulted:
        LOGGER.warning(
            "No header match for %s; using positional defaults (may misattribute columns).",
            ", ".join(defaulted),
        )

    return ColumnMap(
        name=indices["name"],
        state=indices["state"],
        party=indices["party"],
        office_start=indices["office_start"],
        defaulted=tuple(defaulted),
    )
