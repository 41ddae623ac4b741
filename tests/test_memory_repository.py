"""
Tests for the in-memory cache store.
"""

from article_guidance.entities import CacheEntry
from article_guidance.repositories import InMemoryCacheRepository


def _entry(clock, ttl: int) -> CacheEntry:
    return CacheEntry(value={"label": "x"}, expires_at=clock.now + ttl, version="v3")


def test_expired_entry_dropped_on_read(clock):
    store = InMemoryCacheRepository(namespace="articleguidance", clock=clock)
    store.set("articleguidance:wikidata:Q5:en:v3", _entry(clock, 60), 60)

    clock.advance(60)

    assert store.get("articleguidance:wikidata:Q5:en:v3") is None
    assert len(store) == 0


def test_writes_purge_unread_expired_entries(clock):
    store = InMemoryCacheRepository(namespace="articleguidance", clock=clock, sweep_interval=3)
    store.set("articleguidance:wikidata:Q1:en:v3", _entry(clock, 60), 60)
    store.set("articleguidance:wikidata:Q2:en:v3", _entry(clock, 60), 60)
    assert len(store) == 2

    clock.advance(61)
    store.set("articleguidance:wikidata:Q3:en:v3", _entry(clock, 60), 60)

    assert len(store) == 1
    assert store.get("articleguidance:wikidata:Q3:en:v3") is not None


def test_purge_keeps_live_entries(clock):
    store = InMemoryCacheRepository(namespace="articleguidance", clock=clock)
    store.set("articleguidance:wikidata:Q1:en:v3", _entry(clock, 10), 10)
    store.set("articleguidance:wikidata:Q2:en:v3", _entry(clock, 100), 100)

    clock.advance(50)

    assert store.purge_expired() == 1
    assert store.get("articleguidance:wikidata:Q2:en:v3") is not None


def test_clear_all_is_scoped_to_namespace(clock):
    store = InMemoryCacheRepository(namespace="articleguidance", clock=clock)
    store.set("articleguidance:wikidata:Q1:en:v3", _entry(clock, 10), 10)
    store.set("other:wikidata:Q1:en:v3", _entry(clock, 10), 10)

    assert store.clear_all() == 1
    assert len(store) == 1
