"""
Cache package for issuecache.

This package implements the per-profile offline cache: the entry envelope,
key derivation, the manager's read/write paths, disk budget eviction and
usage reporting.

Public API:
    CacheManager: Main cache management interface
    CacheEntry: Entry envelope with creation and expiry timestamps
    CachedSearchResult: Search response bound to its query
    CacheStats: Disk usage snapshot
    CacheStatus: Data provenance labels for the UI
    EvictionPolicy: Disk budget enforcement
    StatsReporter: Usage reporting
"""

from .eviction import EvictionPolicy, EvictionResult
from .manager import CacheManager
from .models import CachedSearchResult, CacheEntry, CacheStats, CacheStatus
from .statistics import StatsReporter

__all__ = [
    "CacheManager",
    "CacheEntry",
    "CachedSearchResult",
    "CacheStats",
    "CacheStatus",
    "EvictionPolicy",
    "EvictionResult",
    "StatsReporter",
]
