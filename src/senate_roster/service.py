"""Read operations over the cached roster."""

from __future__ import annotations

import logging
from datetime import date, datetime

from .cache import RosterCache
from .config import Settings
from .engine import RosterEngine
from .errors import InvalidDateError
from .models import LegislatorRecord, Party, RosterSnapshot

LOGGER = logging.getLogger(__name__)


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` calendar date or raise :class:`InvalidDateError`."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (ValueError, TypeError, AttributeError):
        raise InvalidDateError(value) from None


def count_by_party(records: list[LegislatorRecord]) -> dict[str, int]:
    """Count records per party; every category is present, even at zero."""
    counts = {party.value: 0 for party in Party}
    for record in records:
        counts[record.party.value] += 1
    return counts


class RosterService:
    def __init__(self, cache: RosterCache) -> None:
        self.cache = cache

    @classmethod
    def from_settings(cls, settings: Settings, engine: RosterEngine | None = None) -> RosterService:
        engine = engine or RosterEngine(settings=settings)
        return cls(RosterCache(engine.extract, ttl_seconds=settings.cache_ttl_seconds))

    async def snapshot(self) -> tuple[RosterSnapshot, bool]:
        return await self.cache.lookup()

    async def get_roster(self) -> list[LegislatorRecord]:
        return await self.cache.get()

    async def tenure_split(
        self, cutoff: str | date
    ) -> tuple[list[LegislatorRecord], list[LegislatorRecord]]:
        """``(roster, earlier)`` from one cache lookup.

        *earlier* holds the records whose office start is strictly before
        *cutoff*.  The date is validated before anything is fetched.
        """
        if isinstance(cutoff, datetime):
            cutoff_date = cutoff.date()
        elif isinstance(cutoff, date):
            cutoff_date = cutoff
        else:
            cutoff_date = parse_iso_date(cutoff)
        roster = await self.get_roster()
        # ISO dates sort lexically.
        cutoff_iso = cutoff_date.isoformat()
        return roster, [r for r in roster if r.office_start_date < cutoff_iso]

    async def filter_by_tenure_before(self, cutoff: str | date) -> list[LegislatorRecord]:
        """Records whose office start is strictly earlier than *cutoff*."""
        _, earlier = await self.tenure_split(cutoff)
        return earlier

    async def party_breakdown(self) -> dict[str, int]:
        return count_by_party(await self.get_roster())

    def invalidate_cache(self) -> None:
        self.cache.invalidate()

    async def refresh(self) -> RosterSnapshot:
        self.invalidate_cache()
        snap, _ = await self.cache.lookup()
        LOGGER.info("Refreshed roster: %d records (%s).", len(snap.records), snap.source)
        return snap
