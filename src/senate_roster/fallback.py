"""Hand-authored roster served when live extraction fails outright."""

from __future__ import annotations

from .models import LegislatorRecord, Party

_FALLBACK_ROWS: tuple[tuple[str, str, Party, str], ...] = (
    ("Chuck Schumer", "NY", Party.DEMOCRAT, "1999-01-03"),
    ("Mitch McConnell", "KY", Party.REPUBLICAN, "1985-01-03"),
    ("Dick Durbin", "IL", Party.DEMOCRAT, "1997-01-03"),
    ("John Thune", "SD", Party.REPUBLICAN, "2005-01-03"),
    ("Elizabeth Warren", "MA", Party.DEMOCRAT, "2013-01-03"),
    ("Bernie Sanders", "VT", Party.INDEPENDENT, "2007-01-03"),
    ("Ted Cruz", "TX", Party.REPUBLICAN, "2013-01-03"),
    ("Amy Klobuchar", "MN", Party.DEMOCRAT, "2007-01-03"),
)


def fallback_roster() -> list[LegislatorRecord]:
    """Return a new list of the fixed fallback records."""
    return [
        LegislatorRecord(name=name, state=state, party=party, office_start_date=date)
        for name, state, party, date in _FALLBACK_ROWS
    ]
