"""Tests for the TTL + LRU cache."""

from __future__ import annotations

import pytest

from jobboard.cache import LRUCache, QueryResultCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def test_entry_expires_after_ttl(clock: FakeClock) -> None:
    cache: LRUCache[str] = LRUCache(max_size=10, clock=clock)

    cache.set("k", "v", 1.0)
    assert cache.get("k") == "v"

    clock.advance(1.001)
    assert cache.get("k") is None
    assert "k" not in cache
    assert len(cache) == 0


def test_entry_alive_exactly_at_ttl(clock: FakeClock) -> None:
    cache: LRUCache[str] = LRUCache(max_size=10, clock=clock)
    cache.set("k", "v", 1.0)

    clock.advance(1.0)

    assert cache.get("k") == "v"


def test_default_ttl_applies(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=10, default_ttl=5.0, clock=clock)
    cache.set("k", 1)

    clock.advance(4.9)
    assert cache.has("k")
    clock.advance(0.2)
    assert not cache.has("k")
    assert len(cache) == 0


def test_inserting_past_capacity_evicts_least_recently_used(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=3, clock=clock)
    for index, key in enumerate(["a", "b", "c", "d"]):
        cache.set(key, index)

    assert len(cache) == 3
    assert cache.get("a") is None
    assert cache.keys() == ["b", "c", "d"]


def test_get_promotes_recency(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=3, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    assert cache.get("a") == 1
    cache.set("d", 4)

    assert cache.get("b") is None
    assert set(cache.keys()) == {"a", "c", "d"}


def test_has_does_not_promote_recency(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.has("a")
    cache.set("c", 3)

    assert not cache.has("a")
    assert cache.keys() == ["b", "c"]


def test_replacing_existing_key_does_not_evict(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.set("a", 10)

    assert cache.get("a") == 10
    assert cache.get("b") == 2
    assert cache.keys() == ["a", "b"]


def test_delete_pattern_removes_matching_keys(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=10, clock=clock)
    cache.set("jobs-list-page=1", 1)
    cache.set("jobs-counts", 2)
    cache.set("applications-counts", 3)

    removed = cache.delete_pattern("jobs-")

    assert removed == 2
    assert cache.keys() == ["applications-counts"]


def test_cleanup_removes_only_expired_entries(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=10, clock=clock)
    cache.set("short", 1, 1.0)
    cache.set("long", 2, 60.0)

    clock.advance(2.0)

    assert cache.cleanup() == 1
    assert cache.keys() == ["long"]


def test_stats_report_utilisation(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=4, clock=clock)
    cache.set("a", 1, 1.0)
    clock.advance(2.0)
    cache.set("b", 2, 10.0)

    stats = cache.get_stats()

    assert stats.size == 2
    assert stats.utilization == 50.0
    assert stats.expired_count == 1
    assert stats.average_age == pytest.approx(1.0)
    assert stats.oldest_entry == "a"
    assert stats.newest_entry == "b"


def test_clear_empties_cache(clock: FakeClock) -> None:
    cache: LRUCache[int] = LRUCache(max_size=4, clock=clock)
    cache.set("a", 1)
    cache.clear()

    assert len(cache) == 0
    assert cache.get_stats().oldest_entry is None


def test_invalid_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        LRUCache(max_size=0)


def test_query_result_cache_round_trip(clock: FakeClock) -> None:
    cache: QueryResultCache[list[str]] = QueryResultCache(max_size=5, default_ttl=30.0, clock=clock)
    cache.set_cached_query("jobs-list", ["a", "b"], 2)

    assert cache.get_cached_query("jobs-list") == (["a", "b"], 2)

    clock.advance(31.0)
    assert cache.get_cached_query("jobs-list") is None
