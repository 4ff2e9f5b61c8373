from __future__ import annotations

import pytest

from src.infrastructure.ttl_cache import TTLCache


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_ttl_cache_miss_then_hit() -> None:
    cache: TTLCache[str, int] = TTLCache(ttl_seconds=1.0)
    assert cache.get("a") is None
    cache.set("a", 42)
    assert cache.get("a") == 42
    assert "a" in cache


def test_ttl_cache_expiry() -> None:
    clock = _Clock()
    cache: TTLCache[int, str] = TTLCache(ttl_seconds=0.5, clock=clock)
    cache.set(1, "v")
    clock.now = 0.49
    assert 1 in cache
    clock.now = 0.5
    assert cache.get(1) is None
    assert 1 not in cache


def test_purge_and_len_drop_expired_entries() -> None:
    clock = _Clock()
    cache: TTLCache[int, str] = TTLCache(ttl_seconds=10, clock=clock)
    cache.set(1, "a")
    clock.now = 5
    cache.set(2, "b")
    clock.now = 11
    assert len(cache) == 1
    assert cache.purge() == 0
    clock.now = 20
    assert cache.purge() == 1


def test_discard_and_refresh() -> None:
    clock = _Clock()
    cache: TTLCache[int, str] = TTLCache(ttl_seconds=10, clock=clock)
    cache.set(1, "a")
    cache.discard(1)
    cache.discard(1)
    assert 1 not in cache
    cache.set(1, "a")
    clock.now = 8
    cache.set(1, "b")
    clock.now = 15
    assert cache.get(1) == "b"


def test_ttl_must_be_positive() -> None:
    with pytest.raises(ValueError):
        TTLCache(ttl_seconds=0)
