"""Tests for cache logic."""

import pytest

from yt_transcript_resolver.cache import ResolverCache, TimedCache
from yt_transcript_resolver.config import CacheOptions


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestTimedCache:
    def test_set_and_get(self, clock):
        cache = TimedCache(CacheOptions(), clock)
        cache.set("html:abc", "<html>")
        assert cache.get("html:abc") == "<html>"

    def test_miss(self, clock):
        cache = TimedCache(CacheOptions(), clock)
        assert cache.get("nonexistent") is None

    def test_expiry(self, clock):
        cache = TimedCache(CacheOptions(max_age=60), clock)
        cache.set("k", "v")
        clock.now += 59
        assert cache.get("k") == "v"
        clock.now += 1
        assert cache.get("k") is None
        assert cache.stats()["size"] == 0

    def test_max_age_change_applies_to_existing_entries(self, clock):
        cache = TimedCache(CacheOptions(max_age=3600), clock)
        cache.set("k", "v")
        clock.now += 120
        cache.resize(CacheOptions(max_age=60))
        assert cache.get("k") is None

    def test_disabled(self, clock):
        cache = TimedCache(CacheOptions(enabled=False), clock)
        cache.set("k", "v")
        assert cache.get("k") is None
        assert cache.stats()["size"] == 0

    def test_stats_initial(self, clock):
        stats = TimedCache(CacheOptions(max_size=10), clock).stats()
        assert stats["size"] == 0
        assert stats["max_size"] == 10
        assert stats["hits"] == 0
        assert stats["misses"] == 0

    def test_stats_after_operations(self, clock):
        cache = TimedCache(CacheOptions(), clock)
        cache.set("abc", "hi")
        cache.get("abc")  # hit
        cache.get("xyz")  # miss
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 50.0

    def test_max_size(self, clock):
        cache = TimedCache(CacheOptions(max_size=2), clock)
        cache.set("a", "1")
        cache.set("b", "2")
        cache.set("c", "3")
        assert cache.stats()["size"] == 2
        assert cache.get("a") is None

    def test_shrink_keeps_entries(self, clock):
        cache = TimedCache(CacheOptions(max_size=10), clock)
        cache.set("a", "1")
        cache.resize(CacheOptions(max_size=5))
        assert cache.stats()["max_size"] == 5
        assert cache.get("a") == "1"


class TestResolverCache:
    def test_keys(self):
        assert ResolverCache.page_key("abc") == "html:abc"
        assert ResolverCache.transcript_key("abc", ["en", "de"], False) == "transcript:abc:en,de:False"

    def test_language_order_matters(self):
        assert ResolverCache.transcript_key("abc", ["en", "de"], False) != ResolverCache.transcript_key(
            "abc", ["de", "en"], False
        )

    def test_clear_by_kind(self, clock):
        cache = ResolverCache(CacheOptions(), clock)
        cache.pages.set("html:a", "<html>")
        cache.transcripts.set("transcript:a:en:False", "t")
        cache.clear("page")
        assert cache.pages.get("html:a") is None
        assert cache.transcripts.get("transcript:a:en:False") == "t"
        cache.clear()
        assert cache.transcripts.get("transcript:a:en:False") is None

    def test_clear_unknown_kind(self):
        with pytest.raises(ValueError):
            ResolverCache().clear("cookies")

    def test_update(self, clock):
        cache = ResolverCache(CacheOptions(), clock)
        cache.pages.set("html:a", "<html>")
        cache.update(enabled=False)
        assert cache.options.enabled is False
        assert cache.pages.get("html:a") is None
        cache.update(enabled=True)
        assert cache.pages.get("html:a") == "<html>"
