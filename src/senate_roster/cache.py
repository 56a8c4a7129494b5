"""Time-bounded roster cache.

One :class:`RosterCache` is built at startup and handed to every request
handler.  The current entry is an immutable :class:`RosterSnapshot`; a refresh
swaps the whole object in a single assignment, so readers see either the old
snapshot or the new one and never a mixture.

Concurrent misses share one extraction (an ``asyncio.Lock``), and the loader
runs in a worker thread so the blocking HTTP fetch does not stall the event
loop.  Fallback results are handed back to the caller but not stored, so the
next request tries the live source again.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from .config import DEFAULT_CACHE_TTL_SECONDS
from .models import ExtractionReport, LegislatorRecord, RosterSnapshot

LOGGER = logging.getLogger(__name__)


class RosterCache:
    def __init__(
        self,
        loader: Callable[[], ExtractionReport],
        *,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._loader = loader
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: RosterSnapshot | None = None
        self._generation = 0
        self._lock = asyncio.Lock()
        self.last_report: ExtractionReport | None = None
        self.loads = 0

    # ── inspection ────────────────────────────────────────────────────────

    @property
    def snapshot(self) -> RosterSnapshot | None:
        return self._snapshot

    def age_seconds(self) -> float | None:
        snap = self._snapshot
        if snap is None:
            return None
        return self._clock() - snap.fetched_at

    def is_fresh(self, snap: RosterSnapshot | None = None) -> bool:
        snap = snap if snap is not None else self._snapshot
        if snap is None:
            return False
        return self._clock() - snap.fetched_at < self.ttl_seconds

    # ── lifecycle ─────────────────────────────────────────────────────────

    def invalidate(self) -> None:
        """Drop the snapshot; the next :meth:`get` re-runs extraction."""
        self._snapshot = None
        self._generation += 1
        LOGGER.info("Roster cache invalidated.")

    async def lookup(self) -> tuple[RosterSnapshot, bool]:
        """Return ``(snapshot, served_from_cache)``."""
        snap = self._snapshot
        if self.is_fresh(snap):
            LOGGER.debug("Returning cached data")
            return snap, True

        async with self._lock:
            # Another request may have refreshed while we waited.
            snap = self._snapshot
            if self.is_fresh(snap):
                return snap, True

            generation = self._generation
            report = await asyncio.to_thread(self._loader)
            self.loads += 1
            self.last_report = report

            fresh = RosterSnapshot(
                records=tuple(report.records),
                fetched_at=self._clock(),
                source=report.source,
            )
            if report.used_fallback:
                LOGGER.warning("Serving fallback roster (%d records); not cached.", len(fresh.records))
            elif generation == self._generation:
                self._snapshot = fresh
            return fresh, False

    async def get(self) -> list[LegislatorRecord]:
        snap, _ = await self.lookup()
        return list(snap.records)
