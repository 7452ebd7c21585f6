"""
Expiring key/value cache shared by the volume store and the dictionary.

Values stored here are immutable (tuples, frozen dataclasses). When two
threads fill the same key, the last write wins.
"""

import threading
import time
from typing import Any, Callable, Dict, Tuple

from palidict.config import DEFAULT_CACHE_TTL

_MISSING = object()


class TTLCache:
    """
    Thread-safe cache where every item expires ``ttl`` seconds after it was set.

    Expired items are dropped lazily on access and in bulk by ``purge()``,
    which ``set()`` triggers every ``purge_interval`` writes.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
        purge_interval: int = 1024,
    ):
        if ttl <= 0:
            raise ValueError("ttl must be > 0")
        self.ttl = ttl
        self._clock = clock
        self._items: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()
        self._purge_interval = purge_interval
        self._writes = 0

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for key, or default if absent or expired."""
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return default
            value, expires_at = item
            if self._clock() >= expires_at:
                del self._items[key]
                return default
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._items[key] = (value, self._clock() + self.ttl)
            self._writes += 1
            if self._writes % self._purge_interval == 0:
                self._purge_locked()

    def get_or_set(self, key: str, factory: Callable[[], Any]) -> Any:
        """
        Return the cached value, computing and storing it on a miss.

        The factory runs outside the lock; concurrent misses on the same key
        may each compute a value and the last one stored wins.
        """
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            return value
        value = factory()
        self.set(key, value)
        return value

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def purge(self) -> int:
        """Drop every expired item. Returns how many were removed."""
        with self._lock:
            return self._purge_locked()

    def _purge_locked(self) -> int:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._items.items() if now >= expires_at]
        for key in expired:
            del self._items[key]
        return len(expired)

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
