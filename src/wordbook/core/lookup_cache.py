# src/wordbook/core/lookup_cache.py
"""
Bounded LRU cache of resolved lookups.

Holds positive and negative results alike. Evicting an entry never touches
the ShardIndex, which can always re-derive it.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Iterator

from wordbook.core.entry import LookupResult


logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 512


@dataclass
class CacheEntry:
    value: LookupResult
    last_access: float


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    evictions: int
    size: int
    capacity: int

    def to_dict(self) -> dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "size": self.size,
            "capacity": self.capacity,
        }


class LookupCache:
    def __init__(self, capacity: int = DEFAULT_CAPACITY, clock: Callable[[], float] = time.monotonic):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, word: str) -> LookupResult | None:
        """Return the cached result and mark it most recent. None on a miss."""
        with self._lock:
            entry = self._entries.get(word)
            if entry is None:
                self._misses += 1
                return None
            self._entries.move_to_end(word)
            entry.last_access = self.clock()
            self._hits += 1
            return entry.value

    def put(self, word: str, result: LookupResult) -> None:
        with self._lock:
            entry = self._entries.get(word)
            if entry is not None:
                entry.value = result
                entry.last_access = self.clock()
                self._entries.move_to_end(word)
                return
            self._entries[word] = CacheEntry(result, self.clock())
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("evicted %r", evicted)

    def discard(self, word: str) -> bool:
        with self._lock:
            return self._entries.pop(word, None) is not None

    def discard_where(self, predicate: Callable[[LookupResult], bool]) -> int:
        """Drop every entry whose result matches predicate. Returns the count."""
        with self._lock:
            doomed = [w for w, e in self._entries.items() if predicate(e.value)]
            for w in doomed:
                del self._entries[w]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        """Cached words, least recently used first."""
        with self._lock:
            return list(self._entries)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(self._hits, self._misses, self._evictions, len(self._entries), self.capacity)

    def __contains__(self, word: str) -> bool:
        with self._lock:
            return word in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
