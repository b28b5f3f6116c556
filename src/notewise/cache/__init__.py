"""Result cache for notewise.

Provides the shared, bounded, time-expiring store used by search and
enrichment.
"""

from .store import (
    DEFAULT_MAX_ENTRIES,
    DEFAULT_TTL_SECONDS,
    CacheEntry,
    ResultCache,
    cache_key,
)

__all__ = [
    "DEFAULT_MAX_ENTRIES",
    "DEFAULT_TTL_SECONDS",
    "CacheEntry",
    "ResultCache",
    "cache_key",
]
