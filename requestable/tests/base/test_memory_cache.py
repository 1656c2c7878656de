from __future__ import annotations

import pytest

from requestable.base.interfaces import Cache
from requestable.base.memory import CacheEntry, MemoryCache


def test_memory_cache_satisfies_protocol():
    assert isinstance(MemoryCache(), Cache)  # nosec B101 - assert is appropriate in unit tests


def test_set_get_remove_clear(clock):
    cache = MemoryCache(clock=clock)
    cache.set("a", {"v": 1})
    cache.set("b", [2])
    assert cache.get("a") == {"v": 1}  # nosec B101
    cache.remove("a")
    assert cache.get("a") is None  # nosec B101
    cache.remove("missing")
    cache.clear()
    assert cache.get("b") is None  # nosec B101
    assert len(cache) == 0  # nosec B101


def test_entry_live_until_deadline_then_expired(clock):
    cache = MemoryCache(clock=clock)
    cache.set("k", "v", ttl=5.0)
    clock.now = 4.0
    assert cache.get("k") == "v"  # nosec B101
    clock.now = 5.0
    assert cache.get("k") == "v"  # nosec B101
    clock.now = 6.001
    assert cache.get("k") is None  # nosec B101
    # Lazily removed on read.
    assert "k" not in cache  # nosec B101


def test_no_ttl_never_expires(clock):
    cache = MemoryCache(clock=clock)
    cache.set("none", 1)
    cache.set("zero", 2, ttl=0)
    clock.advance(10_000_000)
    assert cache.get("none") == 1  # nosec B101
    assert cache.get("zero") == 2  # nosec B101


def test_set_overwrites_and_refreshes_deadline(clock):
    cache = MemoryCache(clock=clock)
    cache.set("k", "old", ttl=1.0)
    clock.now = 0.9
    cache.set("k", "new", ttl=1.0)
    clock.now = 1.5
    assert cache.get("k") == "new"  # nosec B101


def test_max_entries_evicts_oldest(clock):
    cache = MemoryCache(clock=clock, max_entries=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert cache.get("a") is None  # nosec B101
    assert cache.get("b") == 2  # nosec B101
    assert cache.get("c") == 3  # nosec B101


def test_invalid_max_entries_rejected():
    with pytest.raises(ValueError):
        MemoryCache(max_entries=0)


def test_cache_entry_expiry_boundary():
    entry = CacheEntry(value="x", expires_at=10.0)
    assert not entry.is_expired(10.0)  # nosec B101
    assert entry.is_expired(10.0001)  # nosec B101
    assert not CacheEntry(value="x").is_expired(1e12)  # nosec B101
