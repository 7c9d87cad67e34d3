"""CSS cache with LRU eviction, optional TTL and theme-version tagging.

Entries live in an OrderedDict whose order is access recency (most
recently used last), so eviction pops the first item without scanning.

Every entry is stamped with the theme version current when it was set.
Changing the version does not sweep the cache. A stale entry is dropped
the next time ``get`` or ``has`` touches it, or by an explicit
``cleanup()``.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

__all__ = ["CSSCache", "CacheStats", "DEFAULT_THEME_VERSION", "monotonic_ms"]

logger = logging.getLogger(__name__)

DEFAULT_THEME_VERSION = "default"


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class _Entry:
    value: str
    timestamp: float
    theme_version: str


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache counters and configuration.

    ``ttl`` is -1 when entries never expire. ``hit_rate`` is a percentage.
    """

    hits: int
    misses: int
    size: int
    hit_rate: float
    max_size: int
    ttl: float
    theme_version: str


class CSSCache:
    """Memoizes generated CSS per raw class string.

    Args:
        max_size: Maximum number of entries. Zero or less disables storage.
        ttl: Entry lifetime in milliseconds; ``math.inf`` never expires.
        enabled: A disabled cache misses every read and ignores every write.
        clock: Returns the current time in milliseconds.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl: float = math.inf,
        enabled: bool = True,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        self.max_size = max_size
        self.ttl = ttl
        self.enabled = enabled
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._theme_version = DEFAULT_THEME_VERSION

    # --- reads --------------------------------------------------------------

    def get(self, key: str) -> str | None:
        """Return cached CSS for *key*, or None on a miss."""
        if not self.enabled:
            return None
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return entry.value

    def has(self, key: str) -> bool:
        """Like get() without counting or touching recency."""
        if not self.enabled:
            return False
        with self._lock:
            return self._live_entry(key) is not None

    def get_many(self, keys: Iterable[str]) -> dict[str, str]:
        """get() for each key; misses are left out of the result."""
        found: dict[str, str] = {}
        for key in keys:
            value = self.get(key)
            if value is not None:
                found[key] = value
        return found

    # --- writes -------------------------------------------------------------

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, evicting the least recently used entry if full."""
        if not self.enabled or self.max_size <= 0:
            return
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted least recently used entry %s", evicted)
            self._entries[key] = _Entry(
                value=value, timestamp=self._clock(), theme_version=self._theme_version
            )

    def set_many(self, items: Mapping[str, str] | Iterable[tuple[str, str]]) -> None:
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self.set(key, value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop all entries and reset the hit/miss counters."""
        with self._lock:
            self._reset()

    # --- theme versioning ---------------------------------------------------

    @property
    def theme_version(self) -> str:
        return self._theme_version

    def set_theme_version(self, version: str) -> None:
        """Switch the current theme version; existing entries go stale lazily."""
        with self._lock:
            if version != self._theme_version:
                logger.debug("Theme version %s -> %s", self._theme_version, version)
                self._theme_version = version

    def clear_with_version(self, version: str) -> None:
        """Drop everything, reset counters and switch version in one step."""
        with self._lock:
            self._reset()
            self._theme_version = version

    def cleanup(self) -> int:
        """Remove every stale-version or expired entry. Returns how many."""
        with self._lock:
            now = self._clock()
            dead = [k for k, e in self._entries.items() if not self._is_live(e, now)]
            for key in dead:
                del self._entries[key]
        if dead:
            logger.debug("Cache cleanup removed %d entries", len(dead))
        return len(dead)

    # --- views --------------------------------------------------------------

    def entries(self) -> list[tuple[str, str]]:
        """Live (key, css) pairs, least recently used first."""
        if not self.enabled:
            return []
        with self._lock:
            now = self._clock()
            return [(k, e.value) for k, e in self._entries.items() if self._is_live(e, now)]

    def keys(self) -> list[str]:
        return [k for k, _ in self.entries()]

    def values(self) -> list[str]:
        return [v for _, v in self.entries()]

    @property
    def size(self) -> int:
        """Stored entries, counting stale ones not yet dropped."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size

    def hit_rate(self) -> float:
        total = self._hits + self._misses
        if total == 0:
            return 0.0
        return self._hits / total * 100

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._entries),
                hit_rate=self.hit_rate(),
                max_size=self.max_size,
                ttl=-1 if math.isinf(self.ttl) else self.ttl,
                theme_version=self._theme_version,
            )

    # --- internals (lock held) ----------------------------------------------

    def _is_live(self, entry: _Entry, now: float) -> bool:
        if entry.theme_version != self._theme_version:
            return False
        return math.isinf(self.ttl) or now - entry.timestamp <= self.ttl

    def _live_entry(self, key: str) -> _Entry | None:
        """The entry for *key* if still valid; stale or expired ones are dropped."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_live(entry, self._clock()):
            del self._entries[key]
            return None
        return entry

    def _reset(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0
