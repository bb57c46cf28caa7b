"""Time-bounded in-memory memoization of assembled profiles."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    key: str
    value: T
    created_at: float


class RatingCache(Generic[T]):
    """Thread-safe TTL cache keyed by the caller's identifier string.

    Staleness is checked lazily on lookup. Two concurrent misses for the same
    key may both build; the last one stored wins.
    """

    def __init__(self, ttl_seconds: float = 3600.0, *, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.created_at > self.ttl_seconds:
                del self._entries[key]
                return None
            return entry.value

    def put(self, key: str, value: T) -> None:
        entry = CacheEntry(key=key, value=value, created_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def get_or_build(self, key: str, build: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = build()
        self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
