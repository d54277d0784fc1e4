"""
issuecache: disk-backed offline cache for issue tracker clients.

A terminal issue tracker client uses this package to keep fetched issues and
search results on disk, per profile, so it can show stale-but-usable data
immediately and refresh it in the background.

Key Features:
    - **Per-profile isolation**: each profile owns its own cache directory
    - **TTL expiry**: entries expire after a configurable number of minutes
    - **Self-healing reads**: corrupt or expired files are deleted on sight
    - **Bounded footprint**: oldest files are evicted when over the size budget
    - **Usage reporting**: file count, size and budget usage for display

Main Classes:
    CacheManager: Read, write, invalidate and clear one profile's cache
    CacheConfig: TTL, size budget and location settings
    Issue / SearchResult: Payload records produced by the network client
    CacheStatus: Fresh / FromCache / Offline provenance labels

Example Usage:
    >>> from issuecache import CacheManager, SearchResult
    >>> cache = CacheManager.from_settings("work", ttl_minutes=30, max_size_mb=100)
    >>> cached = cache.get_search_results("assignee = currentUser()")
    >>> if cached is None:
    ...     result = client.search("assignee = currentUser()")
    ...     cache.set_search_results("assignee = currentUser()", result)

    CLI usage:
        $ issuecache --profile work stats
        $ issuecache --profile work invalidate PROJ-123
"""

from .cache import (
    CachedSearchResult,
    CacheEntry,
    CacheManager,
    CacheStats,
    CacheStatus,
    EvictionPolicy,
    EvictionResult,
    StatsReporter,
)
from .config import CacheConfig
from .error_handling import CacheCorruptionError, CacheError, CacheWriteError, ConfigurationError
from .types import Issue, SearchResult

__version__ = "0.1.0"

__all__ = [
    "CacheManager",
    "CacheConfig",
    "CacheEntry",
    "CachedSearchResult",
    "CacheStats",
    "CacheStatus",
    "EvictionPolicy",
    "EvictionResult",
    "StatsReporter",
    "Issue",
    "SearchResult",
    "CacheError",
    "CacheWriteError",
    "CacheCorruptionError",
    "ConfigurationError",
]
