"""Tests for the rerank TTL cache and its key."""

from caselaw_ranker.rerank.cache import InMemoryRerankCache, make_cache_key


def test_key_is_stable_across_filter_order():
    k1 = make_cache_key("v1", "case-1", "huur", {"a": 1, "b": {"$eq": "x"}})
    k2 = make_cache_key("v1", "case-1", "huur", {"b": {"$eq": "x"}, "a": 1})
    assert k1 == k2


def test_key_changes_with_each_component():
    base = make_cache_key("v1", "case-1", "huur", None)
    assert make_cache_key("v2", "case-1", "huur", None) != base
    assert make_cache_key("v1", "case-2", "huur", None) != base
    assert make_cache_key("v1", "case-1", "pacht", None) != base
    assert make_cache_key("v1", "case-1", "huur", {"court_level": "Hoge Raad"}) != base


def test_none_and_empty_filters_share_a_key():
    assert make_cache_key("v1", "c", "q", None) == make_cache_key("v1", "c", "q", {})


def test_get_within_ttl(clock, scored_candidates):
    cache = InMemoryRerankCache(ttl_seconds=60, clock=clock)
    cache.set("k", scored_candidates)
    clock.advance(59)
    entry = cache.get("k")
    assert entry is not None
    assert list(entry.results) == scored_candidates
    assert entry.timestamp == 1000.0


def test_expired_entry_is_missed_and_swept(clock, scored_candidates):
    cache = InMemoryRerankCache(ttl_seconds=60, clock=clock)
    cache.set("k", scored_candidates)
    clock.advance(60)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_sweep_removes_only_expired(clock, scored_candidates):
    cache = InMemoryRerankCache(ttl_seconds=60, clock=clock)
    cache.set("old", scored_candidates)
    clock.advance(30)
    cache.set("new", scored_candidates)
    clock.advance(45)
    assert cache.sweep() == 1
    assert cache.get("old") is None
    assert cache.get("new") is not None


def test_set_replaces_entry(clock, scored_candidates):
    cache = InMemoryRerankCache(ttl_seconds=60, clock=clock)
    first = cache.set("k", scored_candidates)
    clock.advance(10)
    second = cache.set("k", scored_candidates[:1])
    assert first is not second
    assert len(cache.get("k").results) == 1
    assert len(first.results) == len(scored_candidates)
