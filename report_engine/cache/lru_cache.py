"""Bounded in-memory LRU cache for computed reports."""

from __future__ import annotations

import copy
import time
from collections import OrderedDict
from concurrent.futures import Future
from threading import Lock
from typing import Callable, TypeVar

from report_engine.reports.models import CacheEntry, CacheStatistics

T = TypeVar("T")
DEFAULT_CAPACITY = 100


class BoundedResultCache:
    """Thread-safe LRU cache keyed by string, with hit/miss statistics.

    Computation times are recorded in milliseconds. ``get_or_compute``
    guarantees a single in-flight computation per key: concurrent callers
    for a key that is being computed wait for that result.

    Stored values are private snapshots. Every caller receives its own
    deep copy, so editing a returned report never changes later hits.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, ttl_seconds: float | None = None) -> None:
        if capacity <= 0:
            raise ValueError(f"Cache capacity must be a positive integer, got {capacity}.")
        if ttl_seconds is not None and ttl_seconds <= 0:
            ttl_seconds = None
        self.capacity = capacity
        self.ttl_seconds = ttl_seconds
        self._data: OrderedDict[str, CacheEntry] = OrderedDict()
        self._pending: dict[str, Future] = {}
        self._lock = Lock()
        self._generation = 0
        self._hits = 0
        self._misses = 0
        self._recorded = 0
        self._total_computation_ms = 0.0

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return self.ttl_seconds is not None and now - entry.created_at > self.ttl_seconds

    def _lookup(self, key: str) -> CacheEntry | None:
        # Caller holds the lock.
        now = time.time()
        entry = self._data.get(key)
        if entry is not None and self._is_expired(entry, now):
            del self._data[key]
            entry = None
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        entry.hit_count += 1
        entry.last_accessed_at = now
        self._data.move_to_end(key)
        return entry

    def _store(self, key: str, value: object, compute_ms: float) -> None:
        # Caller holds the lock.
        now = time.time()
        self._data[key] = CacheEntry(
            key=key,
            value=copy.deepcopy(value),
            created_at=now,
            last_accessed_at=now,
            computation_ms=compute_ms,
        )
        self._data.move_to_end(key)
        self._recorded += 1
        self._total_computation_ms += max(0.0, compute_ms)
        while len(self._data) > self.capacity:
            self._data.popitem(last=False)

    def _release(self, key: str, future: Future) -> None:
        # Caller holds the lock. A clear() may have handed the key to a newer computation.
        if self._pending.get(key) is future:
            del self._pending[key]

    def get(self, key: str) -> tuple[object | None, bool]:
        with self._lock:
            entry = self._lookup(key)
            if entry is None:
                return None, False
            stored = entry.value
        return copy.deepcopy(stored), True

    def put(self, key: str, value: object, compute_ms: float = 0.0) -> None:
        with self._lock:
            self._store(key, value, compute_ms)

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        with self._lock:
            entry = self._lookup(key)
            if entry is not None:
                stored = entry.value
                pending = None
                future = None
            else:
                stored = None
                pending = self._pending.get(key)
                if pending is None:
                    future = Future()
                    self._pending[key] = future
                    generation = self._generation
                else:
                    # Joining an in-flight computation is served without recomputing.
                    self._misses -= 1
                    self._hits += 1
        if entry is not None:
            return copy.deepcopy(stored)  # type: ignore[return-value]
        if pending is not None:
            return copy.deepcopy(pending.result())

        started = time.perf_counter()
        try:
            value = compute()
        except BaseException as error:
            with self._lock:
                self._release(key, future)
            future.set_exception(error)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        with self._lock:
            # Results started before a clear() are handed out but not stored or counted.
            if generation == self._generation:
                self._store(key, value, elapsed_ms)
            self._release(key, future)
        future.set_result(value)
        return copy.deepcopy(value)

    def size(self) -> int:
        with self._lock:
            return len(self._data)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data.keys())

    def entry(self, key: str) -> CacheEntry | None:
        """Return the stored entry without touching recency or statistics."""
        with self._lock:
            return self._data.get(key)

    def stats(self) -> CacheStatistics:
        with self._lock:
            average = (self._total_computation_ms / self._recorded) if self._recorded else 0.0
            return CacheStatistics(
                hits=self._hits,
                misses=self._misses,
                total_computation_time=self._total_computation_ms,
                average_computation_time=average,
            )

    def invalidate(self, pattern: str) -> int:
        with self._lock:
            doomed = [key for key in self._data if pattern in key]
            for key in doomed:
                del self._data[key]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._pending.clear()
            self._generation += 1
            self._hits = 0
            self._misses = 0
            self._recorded = 0
            self._total_computation_ms = 0.0
