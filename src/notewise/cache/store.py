"""Bounded, time-expiring result cache.

Shared by query resolution and note enrichment. Entries are evicted
least-recently-used when the cache is full and treated as absent once
older than the TTL.
"""

import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 500
DEFAULT_TTL_SECONDS = 24 * 60 * 60


@dataclass
class CacheEntry:
    """A single cached value.

    Attributes:
        key: Cache key
        value: Stored result (string, list, label or note list)
        inserted_at: Clock reading when the value was stored
        ttl_seconds: Maximum age before the entry is treated as absent
    """

    key: str
    value: Any
    inserted_at: float
    ttl_seconds: float

    def is_expired(self, now: float) -> bool:
        """Check whether the entry has outlived its TTL."""
        return now - self.inserted_at >= self.ttl_seconds


class ResultCache:
    """Thread-safe LRU cache with a uniform time-to-live.

    A single lock guards the ordered map so capacity and recency
    bookkeeping stay consistent under concurrent requests. Every operation
    holds it for O(1) work; expired entries are dropped when read or when
    they reach the least-recently-used end.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            max_entries: Maximum number of live entries
            ttl_seconds: Entry lifetime in seconds
            clock: Monotonic time source (defaults to time.monotonic)

        Raises:
            ValueError: If max_entries or ttl_seconds is not positive
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self._max_entries = max_entries
        self._ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        """Get the capacity."""
        return self._max_entries

    @property
    def ttl_seconds(self) -> float:
        """Get the entry lifetime."""
        return self._ttl_seconds

    def get(self, key: str) -> Any | None:
        """Return the live value for key, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug(f"Cache entry expired: {key[:60]}")
                return None

            self._entries.move_to_end(key)
            return entry.value

    def put(self, key: str, value: Any) -> None:
        """Store or overwrite a value, evicting the LRU entry when full."""
        with self._lock:
            now = self._clock()

            if key in self._entries:
                self._entries.move_to_end(key)
            elif len(self._entries) >= self._max_entries:
                evicted, entry = self._entries.popitem(last=False)
                if entry.is_expired(now):
                    logger.debug(f"Cache full, dropped expired: {evicted[:60]}")
                else:
                    logger.debug(f"Cache full, evicted: {evicted[:60]}")

            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                inserted_at=now,
                ttl_seconds=self._ttl_seconds,
            )

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
            return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def cache_key(operation: str, *parts: Any) -> str:
    """Build a deterministic cache key.

    Every part is JSON-encoded in order, so distinct inputs never share an
    encoding and identical inputs always do. The digest keeps keys short
    for long note bodies.

    Args:
        operation: Name of the cached computation (e.g. "summary")
        *parts: Every input that affects the result

    Returns:
        Key of the form "<operation>:<sha256 hex>"
    """
    encoded = json.dumps([operation, *parts], ensure_ascii=False, default=str)
    digest = hashlib.sha256(encoded.encode("utf-8")).hexdigest()
    return f"{operation}:{digest}"


__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_TTL_SECONDS",
    "CacheEntry",
    "ResultCache",
    "cache_key",
]
