"""Bounded LRU cache of prepared statement handles, keyed by final SQL text."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Iterable, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000


class CacheStats(BaseModel):
    """Point-in-time counters of a StatementCache."""

    size: int
    capacity: int
    hits: int
    misses: int
    evictions: int
    hit_rate: float


class _Entry:

    __slots__ = ("handle", "pinned")

    def __init__(self, handle: Any):
        self.handle = handle
        self.pinned = False


def close_handle(handle: Any) -> None:
    """Default release callback: call ``handle.close()`` when the handle has one."""
    close = getattr(handle, "close", None)
    if callable(close):
        close()


class StatementCache:
    """Thread-safe LRU map from SQL text to a prepared statement handle.

    Handles are owned by the cache from insertion until they are evicted,
    replaced or cleared; they are then passed to ``release``. Pinned entries
    are never evicted: when every entry is pinned, inserts go over capacity.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, release: Optional[Callable[[Any], None]] = None):
        self.capacity = capacity if capacity > 0 else DEFAULT_CAPACITY
        self._release = release or close_handle
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, sql: str) -> bool:
        with self._lock:
            return sql in self._entries

    # lookup / insert

    def get(self, sql: str) -> Optional[Any]:
        """Return the handle for ``sql`` (marking it most recently used), or None."""
        with self._lock:
            entry = self._entries.get(sql)
            if entry is None:
                self._misses += 1
                return None
            self._entries.move_to_end(sql)
            self._hits += 1
            return entry.handle

    def set(self, sql: str, handle: Any) -> None:
        """Insert or replace the handle for ``sql``, evicting LRU unpinned entries until below capacity."""
        with self._lock:
            entry = self._entries.get(sql)
            if entry is not None:
                previous = entry.handle
                entry.handle = handle
                self._entries.move_to_end(sql)
                if previous is not handle:
                    self._close(previous)
                return
            while len(self._entries) >= self.capacity:
                if not self._evict_one():
                    logger.warning(
                        "Statement cache is full of pinned entries (%d/%d); growing past capacity",
                        len(self._entries), self.capacity,
                    )
                    break
            self._entries[sql] = _Entry(handle)

    def get_or_prepare(self, sql: str, prepare: Callable[[str], Any]) -> Any:
        """Return the cached handle for ``sql``, preparing and caching it on a miss.

        Errors raised by ``prepare`` propagate unchanged and nothing is cached.
        ``prepare`` runs outside the lock; concurrent misses both prepare and
        the last one stored wins.
        """
        handle = self.get(sql)
        if handle is not None:
            return handle
        handle = prepare(sql)
        self.set(sql, handle)
        return handle

    def warm(self, queries: Iterable[str], prepare: Callable[[str], Any]) -> int:
        """Prepare and cache each query ahead of use; return how many were prepared.

        Stops at the first error from ``prepare``.
        """
        count = 0
        for sql in queries:
            if sql in self:
                continue
            self.set(sql, prepare(sql))
            count += 1
        return count

    # pinning

    def pin(self, sql: str) -> bool:
        """Exempt ``sql`` from eviction; False when it is not cached."""
        with self._lock:
            entry = self._entries.get(sql)
            if entry is None:
                return False
            entry.pinned = True
            return True

    def unpin(self, sql: str) -> bool:
        """Make ``sql`` evictable again; False only when it is not cached."""
        with self._lock:
            entry = self._entries.get(sql)
            if entry is None:
                return False
            entry.pinned = False
            return True

    def is_pinned(self, sql: str) -> bool:
        with self._lock:
            entry = self._entries.get(sql)
            return entry is not None and entry.pinned

    # maintenance

    def clear(self) -> None:
        """Release every handle and empty the cache."""
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
            for entry in entries:
                self._close(entry.handle)

    def stats(self) -> CacheStats:
        with self._lock:
            lookups = self._hits + self._misses
            return CacheStats(
                size=len(self._entries),
                capacity=self.capacity,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                hit_rate=self._hits / lookups if lookups else 0.0,
            )

    def _evict_one(self) -> bool:
        """Evict the least recently used unpinned entry; False when every entry is pinned."""
        for sql, entry in self._entries.items():
            if not entry.pinned:
                del self._entries[sql]
                self._evictions += 1
                logger.debug("Evicted prepared statement: %s", sql)
                self._close(entry.handle)
                return True
        return False

    def _close(self, handle: Any) -> None:
        try:
            self._release(handle)
        except Exception:  # pylint: disable=broad-except
            logger.warning("Failed to release prepared statement %r", handle, exc_info=True)
