"""Tests for the TTL cache."""

import threading

import pytest

from palidict.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestTTLCache:
    """Tests for TTLCache."""

    def test_get_and_set(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("ped_vol:0", ("entry",))
        assert cache.get("ped_vol:0") == ("entry",)
        assert "ped_vol:0" in cache
        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"

    def test_expiry(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("key", 1)
        clock.now = 9.9
        assert cache.get("key") == 1
        clock.now = 10.0
        assert cache.get("key") is None
        assert len(cache) == 0

    def test_set_refreshes_expiry(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("key", 1)
        clock.now = 8
        cache.set("key", 2)
        clock.now = 15
        assert cache.get("key") == 2

    def test_falsy_values_are_cached(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("attested", False)
        assert cache.get("attested", "missing") is False

    def test_get_or_set(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        calls = []

        def factory():
            calls.append(1)
            return "value"

        assert cache.get_or_set("key", factory) == "value"
        assert cache.get_or_set("key", factory) == "value"
        assert len(calls) == 1

    def test_purge(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("a", 1)
        clock.now = 5
        cache.set("b", 2)
        clock.now = 12
        assert cache.purge() == 1
        assert len(cache) == 1
        assert cache.get("b") == 2

    def test_purge_on_write_interval(self, clock):
        cache = TTLCache(ttl=10, clock=clock, purge_interval=2)
        cache.set("a", 1)
        clock.now = 20
        cache.set("b", 2)
        assert len(cache) == 1

    def test_delete_and_clear(self, clock):
        cache = TTLCache(ttl=10, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        cache.delete("not-there")
        assert "a" not in cache
        cache.clear()
        assert len(cache) == 0

    def test_invalid_ttl(self):
        with pytest.raises(ValueError):
            TTLCache(ttl=0)

    def test_concurrent_writers(self):
        cache = TTLCache(ttl=60)

        def writer(n):
            for i in range(200):
                cache.set(f"key:{i}", n)
                cache.get(f"key:{i}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 200
        assert all(cache.get(f"key:{i}") in range(8) for i in range(200))
