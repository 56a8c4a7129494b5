"""Tests for the TTL roster cache."""

from __future__ import annotations

import asyncio

from senate_roster.cache import RosterCache


def _run(coro):
    return asyncio.run(coro)


class TestRosterCacheHits:
    def test_first_get_loads(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, ttl_seconds=3600, clock=clock)
        records = _run(cache.get())
        assert len(records) == 4
        assert counting_loader.calls == 1
        assert cache.snapshot is not None
        assert cache.snapshot.fetched_at == clock.now

    def test_within_ttl_is_idempotent(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, ttl_seconds=3600, clock=clock)
        first = _run(cache.get())
        clock.advance(3599)
        second = _run(cache.get())
        assert first == second
        assert counting_loader.calls == 1

    def test_lookup_reports_cache_hit(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, clock=clock)
        _, hit_first = _run(cache.lookup())
        _, hit_second = _run(cache.lookup())
        assert (hit_first, hit_second) == (False, True)

    def test_expires_after_ttl(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, ttl_seconds=3600, clock=clock)
        _run(cache.get())
        clock.advance(3600)
        _run(cache.get())
        assert counting_loader.calls == 2

    def test_returned_list_is_a_copy(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, clock=clock)
        records = _run(cache.get())
        records.clear()
        assert len(_run(cache.get())) == 4


class TestRosterCacheInvalidate:
    def test_invalidate_forces_one_reload(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, clock=clock)
        _run(cache.get())
        cache.invalidate()
        assert cache.snapshot is None
        _run(cache.get())
        _run(cache.get())
        assert counting_loader.calls == 2

    def test_invalidate_on_empty_cache(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, clock=clock)
        cache.invalidate()
        assert cache.snapshot is None
        assert counting_loader.calls == 0


class TestRosterCacheFallback:
    def test_fallback_not_stored(self, counting_loader, clock) -> None:
        counting_loader.source = "fallback"
        cache = RosterCache(counting_loader, clock=clock)
        snap, hit = _run(cache.lookup())
        assert snap.source == "fallback"
        assert hit is False
        assert cache.snapshot is None
        _run(cache.get())
        assert counting_loader.calls == 2

    def test_last_report_kept(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, clock=clock)
        _run(cache.get())
        assert cache.last_report is not None
        assert cache.last_report.source == "live"


class TestRosterCacheConcurrency:
    def test_concurrent_misses_share_one_load(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, clock=clock)

        async def _many():
            return await asyncio.gather(*(cache.get() for _ in range(5)))

        results = _run(_many())
        assert counting_loader.calls == 1
        assert all(r == results[0] for r in results)

    def test_snapshot_is_whole(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, clock=clock)
        _run(cache.get())
        snap = cache.snapshot
        assert snap.fetched_at is not None
        assert len(snap.records) == 4
        assert isinstance(snap.records, tuple)


class TestRosterCacheAge:
    def test_age_and_freshness(self, counting_loader, clock) -> None:
        cache = RosterCache(counting_loader, ttl_seconds=10, clock=clock)
        assert cache.age_seconds() is None
        assert cache.is_fresh() is False
        _run(cache.get())
        clock.advance(4)
        assert cache.age_seconds() == 4
        assert cache.is_fresh() is True
        clock.advance(6)
        assert cache.is_fresh() is False
