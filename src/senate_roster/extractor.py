"""Turn the located roster table into :class:`LegislatorRecord` objects.

Every data row produces a :class:`RowOutcome` so the degradation behaviour
(skipped rows, defaulted fields) is visible to callers and tests instead of
disappearing into ``continue`` statements.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bs4 import BeautifulSoup, Tag

from .columns import header_texts, resolve_columns
from .config import DEFAULT_MIN_PLAUSIBLE_RECORDS, DEFAULT_OFFICE_DATE
from .models import ColumnMap, ExtractionReport, LegislatorRecord, Party, RowOutcome, RowStatus
from .normalize import classify_party, clean_cell_text, normalize_date, normalize_state

LOGGER = logging.getLogger(__name__)

MIN_CELLS_PER_ROW = 3
MIN_NAME_LENGTH = 3

# Placeholder state for names recovered from links (no row context).
UNKNOWN_STATE = "Unknown"


def _cell_text(cells: list[Tag], index: int) -> str | None:
    """Text of ``cells[index]``, or None when the index is out of range."""
    if 0 <= index < len(cells):
        return cells[index].get_text(" ", strip=True)
    return None


def _row_hint(row: Tag) -> str:
    classes = row.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def data_rows(table: Tag) -> list[Tag]:
    """Body rows of *table*: ``<tbody>`` rows when present, else all rows."""
    bodies = table.find_all("tbody")
    if bodies:
        return [row for body in bodies for row in body.find_all("tr")]
    return table.find_all("tr")


def extract_row(
    row: Tag,
    row_index: int,
    columns: ColumnMap,
    *,
    default_date: str = DEFAULT_OFFICE_DATE,
) -> RowOutcome:
    """Extract one row into a :class:`RowOutcome`."""
    cells = row.find_all("td")
    if len(cells) < MIN_CELLS_PER_ROW:
        return RowOutcome(row_index, RowStatus.SKIPPED_MALFORMED, reason="too_few_cells")

    name = clean_cell_text(_cell_text(cells, columns.name))
    if len(name) < MIN_NAME_LENGTH:
        return RowOutcome(row_index, RowStatus.SKIPPED_MALFORMED, reason="name_too_short")

    state = normalize_state(_cell_text(cells, columns.state)).upper()
    if not state:
        return RowOutcome(row_index, RowStatus.SKIPPED_MALFORMED, reason="missing_state")

    defaulted: list[str] = []

    party_text = _cell_text(cells, columns.party)
    if party_text is None:
        party = Party.UNKNOWN
        defaulted.append("party")
    else:
        party = classify_party(party_text, _row_hint(row))

    date_text = _cell_text(cells, columns.office_start)
    office_start = normalize_date(date_text) if date_text is not None else None
    if office_start is None:
        office_start = default_date
        defaulted.append("office_start_date")

    record = LegislatorRecord(
        name=name,
        state=state,
        party=party,
        office_start_date=office_start,
    )
    status = RowStatus.FIELD_DEFAULTED if defaulted else RowStatus.ACCEPTED
    return RowOutcome(row_index, status, record=record, defaulted_fields=tuple(defaulted))


def extract_rows(
    table: Tag,
    columns: ColumnMap,
    *,
    default_date: str = DEFAULT_OFFICE_DATE,
) -> list[RowOutcome]:
    outcomes: list[RowOutcome] = []
    for i, row in enumerate(data_rows(table)):
        outcome = extract_row(row, i, columns, default_date=default_date)
        if outcome.record is None:
            LOGGER.debug("Skipped row %d: %s", i, outcome.reason)
        else:
            LOGGER.debug(
                "Added senator: %s (%s) - %s - %s",
                outcome.record.name,
                outcome.record.state,
                outcome.record.party.value,
                outcome.record.office_start_date,
            )
        outcomes.append(outcome)
    return outcomes


def recover_from_links(
    soup: BeautifulSoup,
    existing_names: Iterable[str],
    *,
    default_date: str = DEFAULT_OFFICE_DATE,
) -> list[LegislatorRecord]:
    """Best-effort name recovery from senator links inside any table.

    Only names are recovered; state and party stay unknown.  Duplicates are
    suppressed by exact text match against *existing_names* and each other.
    """
    seen = set(existing_names)
    recovered: list[LegislatorRecord] = []
    for table in soup.find_all("table"):
        for link in table.find_all("a", title=True):
            if "senator" not in str(link["title"]).lower():
                continue
            name = link.get_text(" ", strip=True)
            if len(name) <= MIN_NAME_LENGTH or name in seen:
                continue
            seen.add(name)
            recovered.append(
                LegislatorRecord(
                    name=name,
                    state=UNKNOWN_STATE,
                    party=Party.UNKNOWN,
                    office_start_date=default_date,
                )
            )
    return recovered


def extract_roster(
    soup: BeautifulSoup,
    table: Tag,
    *,
    min_plausible_records: int = DEFAULT_MIN_PLAUSIBLE_RECORDS,
    default_date: str = DEFAULT_OFFICE_DATE,
) -> ExtractionReport:
    """Run column resolution, row extraction and, if needed, link recovery."""
    headers = header_texts(table)
    LOGGER.info("Found headers: %s", headers)
    columns = resolve_columns(headers)
    LOGGER.info(
        "Column indices - Name: %d, State: %d, Party: %d, Assumed: %d",
        columns.name,
        columns.state,
        columns.party,
        columns.office_start,
    )

    outcomes = extract_rows(table, columns, default_date=default_date)
    records = [o.record for o in outcomes if o.record is not None]

    report = ExtractionReport(records=records, outcomes=outcomes, column_map=columns)

    if len(records) < min_plausible_records:
        LOGGER.info(
            "Only found %d senators, trying alternative parsing...",
            len(records),
        )
        recovered = recover_from_links(
            soup, [r.name for r in records], default_date=default_date
        )
        report.records.extend(recovered)
        report.recovered_from_links = len(recovered)

    LOGGER.info(
        "Parsed %d senators (%d skipped rows, %d from links).",
        len(report.records),
        report.count(RowStatus.SKIPPED_MALFORMED),
        report.recovered_from_links,
    )
    return report
