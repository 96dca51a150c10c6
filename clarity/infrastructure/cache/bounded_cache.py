"""Generic bounded cache with TTL and insertion-order eviction."""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """An immutable cached value."""

    key: str
    value: T
    created_at: float


class BoundedCache(Generic[T]):
    """Thread-safe cache with max size and TTL.

    When full, the oldest-inserted entry is evicted. Reads do not refresh an
    entry's position.
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl_seconds: float = 86400,
        clock: Callable[[], float] = time.time,
    ):
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._clock = clock
        self._cache: OrderedDict[str, CacheEntry[T]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return self.get_entry(key, count=False) is not None

    def get_entry(self, key: str, count: bool = True) -> CacheEntry[T] | None:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                if count:
                    self._misses += 1
                return None
            if self._clock() - entry.created_at > self._ttl:
                del self._cache[key]
                if count:
                    self._misses += 1
                return None
            if count:
                self._hits += 1
            return entry

    def get(self, key: str) -> T | None:
        entry = self.get_entry(key)
        return entry.value if entry is not None else None

    def set(self, key: str, value: T) -> None:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
            elif len(self._cache) >= self._max_size:
                self._cache.popitem(last=False)
                self._evictions += 1
            self._cache[key] = CacheEntry(key=key, value=value, created_at=self._clock())

    def delete(self, key: str) -> bool:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "hit_rate": round(self._hits / total * 100, 2) if total > 0 else 0.0,
                "max_size": self._max_size,
                "ttl_seconds": self._ttl,
            }
