"""Per-operation caches of expiring values."""

from __future__ import annotations

import collections
import threading
from contextlib import contextmanager
from typing import Any, Callable, Hashable, Iterator, Optional

from panpcs.expires import DataExpires


class CacheUnit:
    """A thread-safe map of keys to expiring values, with per-key locks."""

    def __init__(self) -> None:
        self._data: dict[Hashable, DataExpires] = {}
        self._key_locks: dict[Hashable, threading.Lock] = {}
        self._mutex = threading.Lock()

    def load(self, key: Hashable) -> Optional[DataExpires]:
        """Return the live value for `key`, dropping it if it has expired."""
        with self._mutex:
            value = self._data.get(key)
            if value is None:
                return None
            if value.is_expired():
                del self._data[key]
                return None
            return value

    def store(self, key: Hashable, value: DataExpires) -> None:
        """Store `value` unless it has already expired."""
        if value.is_expired():
            return
        with self._mutex:
            self._data[key] = value

    def delete(self, key: Hashable) -> None:
        """Remove `key` and its lock."""
        with self._mutex:
            self._data.pop(key, None)
            self._key_locks.pop(key, None)

    def load_or_store(self, key: Hashable, value: DataExpires) -> tuple[Optional[DataExpires], bool]:
        """Return the existing value (loaded=True) or store `value`; expired results give (None, False)."""
        with self._mutex:
            actual = self._data.get(key)
            loaded = actual is not None
            if not loaded:
                self._data[key] = value
                actual = value
            if actual.is_expired():
                del self._data[key]
                return None, False
            return actual, loaded

    def items(self) -> Iterator[tuple[Hashable, DataExpires]]:
        """Yield live entries, dropping expired ones along the way."""
        with self._mutex:
            snapshot = list(self._data.items())
        for key, value in snapshot:
            if value.is_expired():
                with self._mutex:
                    if self._data.get(key) is value:
                        del self._data[key]
                continue
            yield key, value

    @contextmanager
    def lock_key(self, key: Hashable) -> Iterator[None]:
        """Hold the lock belonging to `key` for the duration of the block."""
        with self._mutex:
            lock = self._key_locks.setdefault(key, threading.Lock())
        with lock:
            yield


class CacheOpMap:
    """Cache units keyed by operation name."""

    def __init__(self) -> None:
        self._units: dict[str, CacheUnit] = {}
        self._mutex = threading.Lock()

    def unit(self, op: str) -> CacheUnit:
        """Return the cache unit for `op`, creating it on first use."""
        with self._mutex:
            return self._units.setdefault(op, CacheUnit())

    def remove(self, op: str) -> None:
        """Drop the whole cache unit for `op`."""
        with self._mutex:
            self._units.pop(op, None)

    def clear_expired(self) -> None:
        """Remove expired entries from every unit."""
        with self._mutex:
            units = list(self._units.values())
        for cache in units:
            collections.deque(cache.items(), maxlen=0)

    def cache_operation(
        self, op: str, key: Hashable, func: Callable[[], Optional[DataExpires]]
    ) -> Optional[DataExpires]:
        """Return the cached value for (op, key), computing it with `func` when absent.

        The computation runs under the key's lock, so concurrent callers compute once.
        A result of None is returned but not cached; exceptions from `func` propagate.
        """
        cache = self.unit(op)
        with cache.lock_key(key):
            data = cache.load(key)
            if data is None:
                data = func()
                if data is not None:
                    cache.store(key, data)
            return data


GLOBAL_CACHE_OP_MAP = CacheOpMap()