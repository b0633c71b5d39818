"""In-memory implementation of ResponseCache.

Entries live in a process-local dict guarded by a lock. Nothing is
persisted across restarts.
"""

import logging
import threading
import time
from collections.abc import Callable

from portfolio_ai.config import settings
from portfolio_ai.entities import CacheEntryEntity, ImproveResultEntity

logger = logging.getLogger(__name__)


class InMemoryResponseCache:
    """Bounded, time-expiring response cache.

    This class satisfies the ResponseCache protocol through structural
    typing - no explicit inheritance needed.

    Capacity policy:
    - After an insertion, if the entry count exceeds ``capacity``, all
      expired entries are swept
    - Live entries are never evicted by that check, so the cache may hold
      more than ``capacity`` live entries
    - If ``hard_capacity`` is set and the cache is still above it after the
      sweep, the oldest entries are evicted until it fits
    """

    def __init__(
        self,
        ttl: float | None = None,
        capacity: int | None = None,
        hard_capacity: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl: Entry time-to-live in seconds. Defaults to settings.
            capacity: Entry count that triggers an expiry sweep. Defaults to settings.
            hard_capacity: Optional strict limit on entries. Defaults to settings (0 = off).
            clock: Source of Unix timestamps, injectable for tests.
        """
        self._ttl = ttl or settings.cache_ttl
        self._capacity = capacity or settings.cache_capacity
        limit = settings.cache_hard_capacity if hard_capacity is None else hard_capacity
        self._hard_capacity = limit or None
        self._clock = clock
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        ttl: float | None = None,
        capacity: int | None = None,
        hard_capacity: int | None = None,
    ) -> "InMemoryResponseCache":
        """Factory method to create InMemoryResponseCache with defaults.

        Args:
            ttl: Entry TTL in seconds. If None, uses settings.
            capacity: Sweep threshold. If None, uses settings.
            hard_capacity: Strict limit. If None, uses settings.

        Returns:
            Configured InMemoryResponseCache
        """
        return cls(ttl=ttl, capacity=capacity, hard_capacity=hard_capacity)

    def get(self, key: str) -> ImproveResultEntity | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock(), self._ttl):
                del self._entries[key]
                return None
            return entry.response

    def put(self, key: str, response: ImproveResultEntity) -> None:
        with self._lock:
            # Re-inserting moves the key to the end, keeping dict order oldest-first
            self._entries.pop(key, None)
            self._entries[key] = CacheEntryEntity(response=response, saved_at=self._clock())

            if len(self._entries) > self._capacity:
                removed = self._sweep_locked()
                if removed:
                    logger.debug("Swept %d expired cache entries", removed)

            if self._hard_capacity is not None and len(self._entries) > self._hard_capacity:
                overflow = len(self._entries) - self._hard_capacity
                for old_key in list(self._entries)[:overflow]:
                    del self._entries[old_key]
                logger.info("Evicted %d oldest cache entries over hard capacity", overflow)

    def sweep_expired(self) -> int:
        with self._lock:
            return self._sweep_locked()

    def _sweep_locked(self) -> int:
        now = self._clock()
        expired = [
            key for key, entry in self._entries.items() if entry.is_expired(now, self._ttl)
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> dict:
        with self._lock:
            now = self._clock()
            live = sum(
                1 for entry in self._entries.values() if not entry.is_expired(now, self._ttl)
            )
            return {
                "total_entries": len(self._entries),
                "live_entries": live,
                "ttl": self._ttl,
                "capacity": self._capacity,
                "hard_capacity": self._hard_capacity,
            }

    @property
    def ttl(self) -> float:
        """Get entry time-to-live in seconds."""
        return self._ttl

    @property
    def capacity(self) -> int:
        """Get the entry count that triggers an expiry sweep."""
        return self._capacity
