import threading
import time
from concurrent.futures import ThreadPoolExecutor

from panpcs.cachemap import CacheOpMap, CacheUnit
from panpcs.expires import data_expires


def test_cache_map_data_expires():
    cm = CacheOpMap()
    cache = cm.unit("op")
    cache.store("key_1", data_expires("value_1", 0.2))
    time.sleep(0.4)
    assert cache.load("key_1") is None


def test_cache_operation_returns_cached_value():
    cm = CacheOpMap()
    data = cm.cache_operation("op", "key_1", lambda: data_expires("value_1", 1))
    assert data.data == "value_1"
    new_data = cm.cache_operation("op", "key_1", lambda: data_expires("value_3", 1))
    assert new_data is data
    assert new_data.data == "value_1"


def test_cache_operation_lock_key():
    cm = CacheOpMap()
    counts = {"key_1": 0, "key_2": 0}
    counter_lock = threading.Lock()

    def compute(key, i):
        def func():
            time.sleep(0.00005)
            with counter_lock:
                counts[key] += 1
            return data_expires(f"{key}: {i}", 10)

        return func

    def worker(i):
        first = cm.cache_operation("op", "key_1", compute("key_1", i))
        second = cm.cache_operation("op", "key_2", compute("key_2", i))
        return first.data, second.data

    with ThreadPoolExecutor(max_workers=50) as pool:
        results = list(pool.map(worker, range(2000)))

    assert counts == {"key_1": 1, "key_2": 1}
    assert len({first for first, _ in results}) == 1
    assert len({second for _, second in results}) == 1
    assert results[0][0].startswith("key_1: ")
    assert results[0][1].startswith("key_2: ")


def test_store_ignores_expired_value():
    cache = CacheUnit()
    cache.store("k", data_expires("v", -1))
    assert cache.load("k") is None


def test_load_or_store():
    cache = CacheUnit()
    first = data_expires("a", 10)
    actual, loaded = cache.load_or_store("k", first)
    assert actual is first and loaded is False
    actual, loaded = cache.load_or_store("k", data_expires("b", 10))
    assert actual is first and loaded is True


def test_load_or_store_expired():
    cache = CacheUnit()
    assert cache.load_or_store("k", data_expires("a", -1)) == (None, False)
    assert cache.load("k") is None


def test_delete():
    cache = CacheUnit()
    cache.store("k", data_expires("v", 10))
    cache.delete("k")
    assert cache.load("k") is None


def test_items_skips_expired():
    cache = CacheUnit()
    live = data_expires("live", 10)
    cache.store("live", live)
    stale = data_expires("stale", 10)
    cache.store("stale", stale)
    stale.set_expired(True)
    assert list(cache.items()) == [("live", live)]


def test_remove_gives_fresh_unit():
    cm = CacheOpMap()
    cm.unit("op").store("k", data_expires("v", 10))
    cm.remove("op")
    assert cm.unit("op").load("k") is None


def test_unit_is_reused():
    cm = CacheOpMap()
    cm.unit("op").store("k", data_expires("v", 10))
    loaded = cm.unit("op").load("k")
    assert loaded.data == "v"


def test_clear_expired():
    cm = CacheOpMap()
    cache = cm.unit("op")
    stale = data_expires("stale", 10)
    cache.store("stale", stale)
    live = data_expires("live", 10)
    cache.store("live", live)
    stale.set_expired(True)
    cm.clear_expired()
    stale.set_expired(False)
    assert cache.load("stale") is None
    assert cache.load("live") is live


def test_cache_operation_does_not_cache_none():
    cm = CacheOpMap()
    calls = []

    def func():
        calls.append(1)
        return None

    assert cm.cache_operation("op", "k", func) is None
    assert cm.cache_operation("op", "k", func) is None
    assert len(calls) == 2