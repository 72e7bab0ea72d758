"""
Bounded, TTL-based in-memory cache.

Expiry is lazy: an entry is dropped when `get`/`has` touches it after its TTL
has elapsed. Expired entries that nobody touches still count toward the
capacity until the capacity rule evicts them.

The cache is best effort. Callers must tolerate misses and must not rely on it
for correctness.
"""
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

from catalog_backend.config import CACHE_DEFAULT_TTL, CACHE_MAX_SIZE

logger = logging.getLogger(__name__)


@dataclass
class _CacheEntry:
    value: Any
    inserted_at: float
    ttl: float


@dataclass(frozen=True)
class CacheStats:
    size: int
    default_ttl: float


class EphemeralCache:
    """
    Process-wide key/value cache. Construct one per service and inject it.

    TTLs are in seconds. A single lock guards each operation; there is no
    per-key locking.
    """

    def __init__(
        self,
        *,
        max_size: int = CACHE_MAX_SIZE,
        default_ttl: float = CACHE_DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._max_size = max_size
        self._default_ttl = float(default_ttl)
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def _live_entry(self, key: str) -> _CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at > entry.ttl:
            del self._entries[key]
            return None
        return entry

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._live_entry(key)
            return default if entry is None else entry.value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        entry = _CacheEntry(
            value=value,
            inserted_at=self._clock(),
            ttl=self._default_ttl if ttl is None else float(ttl),
        )
        with self._lock:
            if key in self._entries:
                # A re-set counts as a fresh insertion.
                del self._entries[key]
            elif len(self._entries) >= self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Cache full ({self._max_size}); evicted {evicted!r}")
            self._entries[key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(size=len(self._entries), default_ttl=self._default_ttl)
