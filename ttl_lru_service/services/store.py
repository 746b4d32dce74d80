# =============================================
# File: ttl_lru_service/services/store.py
# Purpose: Bounded, thread-safe LRU store with lazy per-entry TTL
# =============================================
"""
Bounded TTL-LRU store.

- Recency order and key lookup share one OrderedDict: the first item is the
  least recently touched, the last item the most recently touched.
- Expiration is lazy. An expired entry is only reclaimed when ``get`` touches
  it or when capacity pressure evicts it from the LRU end.
- Capacity eviction is pure LRU: it does not look at expiry.
- Every read and write of the structure happens under a single store lock.
"""
from __future__ import annotations

import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, List, Tuple, Union

from loguru import logger

from ttl_lru_service.domain.errors import InvalidCapacityError

TTL = Union[int, float, timedelta]


@dataclass(slots=True)
class Entry:
    key: str
    value: str
    expires_at: float  # clock() units, seconds


@dataclass(frozen=True)
class StoreStats:
    hits: int
    misses: int
    expirations: int
    evictions: int
    size: int
    capacity: int

    def as_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "expirations": self.expirations,
            "evictions": self.evictions,
            "size": self.size,
            "capacity": self.capacity,
        }


def _ttl_seconds(ttl: TTL) -> float:
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    try:
        return float(ttl)
    except OverflowError:
        # Ints past float range: never expires / already expired.
        return math.inf if ttl > 0 else -math.inf


class TTLLRUStore:
    """
    Fixed-capacity key/value store for string payloads.

    get(key) -> (value, found)
    set(key, value, ttl) -> None
    """

    def __init__(self, capacity: int, clock: Callable[[], float] = time.monotonic) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidCapacityError(f"capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._clock = clock
        self._entries: "OrderedDict[str, Entry]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._expirations = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Presence only; says nothing about expiry and does not touch recency.
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> Tuple[str, bool]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return "", False

            if self._clock() >= entry.expires_at:
                self._remove(key)
                self._expirations += 1
                self._misses += 1
                logger.debug(f"[store] expired key={key!r}")
                return "", False

            self._entries.move_to_end(key, last=True)
            self._hits += 1
            return entry.value, True

    def set(self, key: str, value: str, ttl: TTL) -> None:
        with self._lock:
            expires_at = self._clock() + _ttl_seconds(ttl)
            entry = self._entries.get(key)
            if entry is not None:
                # Presence, not validity, decides the update path.
                entry.value = value
                entry.expires_at = expires_at
                self._entries.move_to_end(key, last=True)
                return

            self._entries[key] = Entry(key=key, value=value, expires_at=expires_at)
            if len(self._entries) > self._capacity:
                oldest = next(iter(self._entries))
                self._remove(oldest)
                self._evictions += 1
                logger.debug(f"[store] evicted key={oldest!r} capacity={self._capacity}")

    def _remove(self, key: str) -> None:
        # Caller holds the lock.
        self._entries.pop(key, None)

    def keys(self) -> List[str]:
        """Snapshot of held keys, most recently touched first."""
        with self._lock:
            return list(reversed(self._entries.keys()))

    def stats(self) -> StoreStats:
        with self._lock:
            return StoreStats(
                hits=self._hits,
                misses=self._misses,
                expirations=self._expirations,
                evictions=self._evictions,
                size=len(self._entries),
                capacity=self._capacity,
            )

    def check_invariants(self) -> None:
        """Raise AssertionError when the count bound or the key index is broken."""
        with self._lock:
            if len(self._entries) > self._capacity:
                raise AssertionError(
                    f"store holds {len(self._entries)} entries, capacity is {self._capacity}"
                )
            for key, entry in self._entries.items():
                if entry.key != key:
                    raise AssertionError(f"index key {key!r} points at entry {entry.key!r}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = self._misses = self._expirations = self._evictions = 0
