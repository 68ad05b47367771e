from __future__ import annotations

import threading

import pytest

from printduka_sdk.query import QueryKey
from printduka_sdk.query_cache import QueryCache

from conftest import FakeClock

VENDORS_KEY = QueryKey("vendors", (), 1, 20)
LPOS_KEY = QueryKey("lpos", (("status", "pending"),), 1, 20)


def test_cache_hits_until_ttl_expires(cache: QueryCache, clock: FakeClock) -> None:
    calls = []

    def loader() -> dict:
        calls.append(1)
        return {"n": len(calls)}

    assert cache.fetch(VENDORS_KEY, loader) == {"n": 1}
    assert cache.fetch(VENDORS_KEY, loader) == {"n": 1}
    clock.advance_ms(60_000)
    assert cache.fetch(VENDORS_KEY, loader) == {"n": 2}
    assert len(calls) == 2


def test_force_refresh_bypasses_entry(cache: QueryCache) -> None:
    values = iter([1, 2])

    assert cache.fetch(VENDORS_KEY, lambda: next(values)) == 1
    assert cache.fetch(VENDORS_KEY, lambda: next(values), force_refresh=True) == 2
    assert cache.get(VENDORS_KEY) == 2


def test_none_is_not_cached(cache: QueryCache) -> None:
    cache.fetch(VENDORS_KEY, lambda: None)

    assert cache.get(VENDORS_KEY) is None


def test_invalidate_drops_whole_family_only(cache: QueryCache) -> None:
    cache.set(VENDORS_KEY, "page-1")
    cache.set(VENDORS_KEY.with_page(2), "page-2")
    cache.set(LPOS_KEY, "lpos")

    cache.invalidate("vendors")

    assert cache.get(VENDORS_KEY) is None
    assert cache.get(VENDORS_KEY.with_page(2)) is None
    assert cache.get(LPOS_KEY) == "lpos"


def test_concurrent_reads_share_one_request(cache: QueryCache) -> None:
    started = threading.Event()
    release = threading.Event()
    calls = []

    def loader() -> str:
        calls.append(1)
        started.set()
        release.wait(timeout=5)
        return "rows"

    results: list[str] = []
    owner = threading.Thread(target=lambda: results.append(cache.fetch(VENDORS_KEY, loader)))
    owner.start()
    assert started.wait(timeout=5)
    assert cache.in_flight(VENDORS_KEY)

    waiter = threading.Thread(target=lambda: results.append(cache.fetch(VENDORS_KEY, loader)))
    waiter.start()
    release.set()
    owner.join(timeout=5)
    waiter.join(timeout=5)

    assert results == ["rows", "rows"]
    assert len(calls) == 1
    assert not cache.in_flight(VENDORS_KEY)


def test_read_started_before_invalidation_is_not_stored(cache: QueryCache) -> None:
    def loader() -> str:
        cache.invalidate("vendors")
        return "stale rows"

    assert cache.fetch(VENDORS_KEY, loader) == "stale rows"
    assert cache.get(VENDORS_KEY) is None


def test_loader_error_propagates_and_frees_slot(cache: QueryCache) -> None:
    def boom() -> str:
        raise RuntimeError("network")

    with pytest.raises(RuntimeError):
        cache.fetch(VENDORS_KEY, boom)

    assert not cache.in_flight(VENDORS_KEY)
    assert cache.fetch(VENDORS_KEY, lambda: "ok") == "ok"


def test_zero_ttl_disables_storage(clock: FakeClock) -> None:
    cache = QueryCache(ttl_seconds=0, now=clock)

    cache.fetch(VENDORS_KEY, lambda: "rows")

    assert cache.get(VENDORS_KEY) is None
