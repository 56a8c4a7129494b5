from __future__ import annotations

from collections.abc import Callable

import pytest

from senate_roster.config import Settings
from senate_roster.models import ExtractionReport, LegislatorRecord, Party

# ── HTML builders ─────────────────────────────────────────────────────────────

DEFAULT_HEADERS = ["State", "Portrait", "Senator", "Party", "Born", "Assumed office", "Term up"]


def roster_row(
    state: str,
    name: str,
    party: str,
    assumed: str,
    *,
    row_class: str = "",
) -> str:
    cls = f' class="{row_class}"' if row_class else ""
    return (
        f"<tr{cls}>"
        f"<td>{state}</td>"
        "<td><img src='portrait.jpg'/></td>"
        f'<td><a href="/wiki/{name.replace(" ", "_")}" title="{name}">{name}</a></td>'
        f"<td>{party}</td>"
        "<td>1950</td>"
        f"<td>{assumed}</td>"
        "<td>2027</td>"
        "</tr>"
    )


def roster_table(
    rows: list[str],
    *,
    headers: list[str] | None = None,
    marker: str = "wikitable sortable",
    table_id: str = "senators",
) -> str:
    head = "".join(f"<th>{h}</th>" for h in (headers if headers is not None else DEFAULT_HEADERS))
    cls = f' class="{marker}"' if marker else ""
    return (
        f'<table{cls} id="{table_id}">'
        f"<thead><tr>{head}</tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table>"
    )


def page(*tables: str) -> str:
    return f"<html><body><h1>List of current senators</h1>{''.join(tables)}</body></html>"


SAMPLE_ROWS = [
    roster_row("New York", "Chuck Schumer[a]", "Democratic", "January 3, 1999"),
    roster_row("Kentucky", "Mitch McConnell", "Republican", "January 3, 1985[1]"),
    roster_row("Vermont", "Bernie Sanders", "Independent[b]", "January 3, 2007"),
    roster_row("Massachusetts", "Elizabeth Warren", "Democratic", "Jan 3, 2013"),
    roster_row("TX", "Ted Cruz", "R", "2013-01-03"),
    roster_row("Georgia", "Jon Ossoff", "xyz", "not a date", row_class="democratic-row"),
]

DECOY_TABLE = roster_table(
    [roster_row("Ohio", "Someone Else", "Republican", "1990")],
    headers=["State", "Senator", "Reason for change"],
    table_id="changes",
)


@pytest.fixture
def make_row() -> Callable[..., str]:
    return roster_row


@pytest.fixture
def make_table() -> Callable[..., str]:
    return roster_table


@pytest.fixture
def make_page() -> Callable[..., str]:
    return page


@pytest.fixture
def sample_page() -> str:
    """A decoy marked table followed by the real roster table."""
    return page(DECOY_TABLE, roster_table(SAMPLE_ROWS))


@pytest.fixture
def settings() -> Settings:
    """Settings with link recovery disabled (threshold 0)."""
    return Settings(min_plausible_records=0, cache_ttl_seconds=3600.0)


# ── Fake collaborators ────────────────────────────────────────────────────────


class FakeSource:
    """Document source returning canned markup (or raising) and counting calls."""

    def __init__(self, markup: str = "", error: Exception | None = None) -> None:
        self.markup = markup
        self.error = error
        self.calls: list[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.markup


@pytest.fixture
def fake_source() -> Callable[..., FakeSource]:
    return FakeSource


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ── Record fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def sample_records() -> list[LegislatorRecord]:
    return [
        LegislatorRecord("Chuck Schumer", "NY", Party.DEMOCRAT, "1999-01-03"),
        LegislatorRecord("Ted Cruz", "TX", Party.REPUBLICAN, "2013-01-03"),
        LegislatorRecord("Bernie Sanders", "VT", Party.INDEPENDENT, "2007-01-03"),
        LegislatorRecord("Jon Ossoff", "GA", Party.UNKNOWN, "2021-01-20"),
    ]


@pytest.fixture
def counting_loader(sample_records: list[LegislatorRecord]):
    """Loader stub for RosterCache; ``loader.calls`` counts invocations."""

    class _Loader:
        def __init__(self) -> None:
            self.calls = 0
            self.source = "live"

        def __call__(self) -> ExtractionReport:
            self.calls += 1
            return ExtractionReport(records=list(sample_records), source=self.source)

    return _Loader()
