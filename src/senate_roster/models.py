from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Party(str, Enum):
    """Closed set of party categories a record can carry."""

    DEMOCRAT = "Democrat"
    REPUBLICAN = "Republican"
    INDEPENDENT = "Independent"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class LegislatorRecord:
    name: str  # e.g. "Chuck Schumer" (footnotes stripped)
    state: str  # e.g. "NY"
    party: Party
    office_start_date: str  # ISO "YYYY-MM-DD"

    def to_dict(self) -> dict[str, str]:
        """Wire shape used by the REST API (``assumedOffice`` key)."""
        return {
            "name": self.name,
            "state": self.state,
            "party": self.party.value,
            "assumedOffice": self.office_start_date,
        }


class RowStatus(str, Enum):
    ACCEPTED = "accepted"
    FIELD_DEFAULTED = "field_defaulted"
    SKIPPED_MALFORMED = "skipped_malformed"


@dataclass(frozen=True)
class RowOutcome:
    """What happened to one table row during extraction."""

    row_index: int
    status: RowStatus
    record: LegislatorRecord | None = None
    reason: str = ""  # e.g. "too_few_cells" (skips only)
    defaulted_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ColumnMap:
    name: int
    state: int
    party: int
    office_start: int
    # Fields whose index is a positional guess rather than a header match.
    defaulted: tuple[str, ...] = ()


@dataclass
class ExtractionReport:
    """Diagnostic record of one pass through the extraction pipeline."""

    records: list[LegislatorRecord] = field(default_factory=list)
    outcomes: list[RowOutcome] = field(default_factory=list)
    table_strategy: str = ""
    column_map: ColumnMap | None = None
    recovered_from_links: int = 0
    source: str = "live"  # "live" or "fallback"
    error: str = ""

    @property
    def used_fallback(self) -> bool:
        return self.source == "fallback"

    def count(self, status: RowStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    def summary(self) -> dict:
        """JSON-friendly view for the diagnostics endpoint."""
        return {
            "source": self.source,
            "error": self.error or None,
            "tableStrategy": self.table_strategy or None,
            "columns": (
                {
                    "name": self.column_map.name,
                    "state": self.column_map.state,
                    "party": self.column_map.party,
                    "assumedOffice": self.column_map.office_start,
                    "defaulted": list(self.column_map.defaulted),
                }
                if self.column_map is not None
                else None
            ),
            "rows": {status.value: self.count(status) for status in RowStatus},
            "recoveredFromLinks": self.recovered_from_links,
            "records": len(self.records),
        }


@dataclass(frozen=True)
class RosterSnapshot:
    """Immutable cache entry; replaced whole, never edited in place."""

    records: tuple[LegislatorRecord, ...]
    fetched_at: float  # epoch seconds
    source: str = "live"
