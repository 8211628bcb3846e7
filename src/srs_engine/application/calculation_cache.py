"""
Bounded memo table for SM-2 results.

Entries are keyed by the calculator's numeric inputs and stored without a
next_review timestamp; every hit is re-anchored to the caller's "now".
The cache is advisory: clearing it never changes a scheduling result.
"""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from srs_engine.domain.constants import DEFAULT_CACHE_CAPACITY
from srs_engine.domain.models import CalculationResult

logger = logging.getLogger(__name__)

CacheKey = tuple[int, int, int, float]


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    capacity: int
    dropped: int


class CalculationCache:
    """
    Thread-safe, fixed-capacity cache of time-independent SM-2 results.

    Once full, further stores are dropped; there is no eviction.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_CAPACITY):
        if capacity < 0:
            raise ValueError(f"Cache capacity must be >= 0, got {capacity}")
        self._capacity = capacity
        self._entries: dict[CacheKey, CalculationResult] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._dropped = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @staticmethod
    def make_key(quality: int, repetitions: int, interval: int, ease_factor: float) -> CacheKey:
        return (quality, repetitions, interval, ease_factor)

    def lookup(
        self,
        quality: int,
        repetitions: int,
        interval: int,
        ease_factor: float,
        now: datetime,
    ) -> CalculationResult | None:
        """
        Return the cached result for these inputs with next_review relative to `now`,
        or None on a miss.
        """
        key = self.make_key(quality, repetitions, interval, ease_factor)
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                self._misses += 1
                return None
            self._hits += 1

        return replace(cached, next_review=now + timedelta(days=cached.interval))

    def store(self, key: CacheKey, result: CalculationResult) -> bool:
        """
        Store a result under `key`. The timestamp is stripped before storing.

        Returns:
            True if the entry is now cached, False if it was dropped because
            the cache is full.
        """
        entry = replace(result, next_review=None)
        with self._lock:
            if key in self._entries:
                # Same inputs always produce the same value.
                return True
            if len(self._entries) >= self._capacity:
                if self._dropped == 0:
                    logger.debug(f"Calculation cache full ({self._capacity}); dropping new entries")
                self._dropped += 1
                return False
            self._entries[key] = entry
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
            self._dropped = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._entries),
                capacity=self._capacity,
                dropped=self._dropped,
            )
