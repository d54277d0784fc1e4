"""
Cache data models for issuecache.

This module contains the envelope every cache file is stored in, the record
used for cached search responses, the usage snapshot reported to the UI and
the provenance vocabulary the UI labels data with.

Classes:
    CacheEntry: Generic envelope pairing a payload with its lifecycle stamps
    CachedSearchResult: A search response bound to the query that produced it
    CacheStats: Point-in-time disk usage snapshot for one profile
    CacheStatus: Fresh / FromCache / Offline provenance labels

On disk an entry is a JSON object::

    {"data": <payload>, "cached_at": 1700000000, "expires_at": 1700001800}

Both timestamps are integer seconds since the Unix epoch.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Generic, TypeVar

from ..error_handling import CacheCorruptionError
from ..types import SearchResult

T = TypeVar("T")


def _now() -> int:
    return int(time.time())


# Largest span a timedelta can hold, in whole seconds
_MAX_DELTA_SECONDS = timedelta.max.days * 86400


def _delta(seconds: int) -> timedelta:
    return timedelta(seconds=min(max(0, seconds), _MAX_DELTA_SECONDS))


def _timestamp(raw: dict[str, Any], name: str) -> int:
    value = raw.get(name)
    # bool is an int subclass but never a valid timestamp
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CacheCorruptionError(f"invalid {name!r} timestamp: {value!r}")
    return value


@dataclass
class CacheEntry(Generic[T]):
    """A cached payload plus its creation and expiry timestamps."""

    data: T
    cached_at: int
    expires_at: int

    @classmethod
    def new(cls, data: T, ttl_seconds: int, now: int | None = None) -> CacheEntry[T]:
        """Stamp a payload with ``cached_at = now`` and ``expires_at = now + ttl``."""
        cached_at = _now() if now is None else now
        return cls(data=data, cached_at=cached_at, expires_at=cached_at + max(0, ttl_seconds))

    @property
    def is_expired(self) -> bool:
        """Check if the cache entry has expired."""
        return _now() > self.expires_at

    @property
    def age(self) -> timedelta:
        """Time since the entry was written; zero if the clock went backwards."""
        return _delta(_now() - self.cached_at)

    @property
    def time_remaining(self) -> timedelta:
        """Time until expiry; zero once expired."""
        return _delta(self.expires_at - _now())

    def to_dict(self, encode: Callable[[T], Any] | None = None) -> dict[str, Any]:
        return {
            "data": encode(self.data) if encode else self.data,
            "cached_at": self.cached_at,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_dict(
        cls, raw: Any, decode: Callable[[Any], T] | None = None
    ) -> CacheEntry[T]:
        """
        Rebuild an entry from its decoded JSON form.

        Raises:
            CacheCorruptionError: If the envelope or its payload is malformed
        """
        if not isinstance(raw, dict) or "data" not in raw:
            raise CacheCorruptionError("cache file is not an entry envelope")

        cached_at = _timestamp(raw, "cached_at")
        expires_at = _timestamp(raw, "expires_at")

        try:
            data = decode(raw["data"]) if decode else raw["data"]
        except (KeyError, TypeError, ValueError) as e:
            raise CacheCorruptionError(f"invalid payload: {e}") from e

        return cls(data=data, cached_at=cached_at, expires_at=expires_at)


@dataclass
class CachedSearchResult:
    """A search response stored together with its query text."""

    query: str
    results: SearchResult

    def to_dict(self) -> dict[str, Any]:
        return {"query": self.query, "results": self.results.to_dict()}

    @classmethod
    def from_dict(cls, raw: Any) -> CachedSearchResult:
        if not isinstance(raw, dict):
            raise TypeError("cached search result must be an object")
        query = raw["query"]
        if not isinstance(query, str):
            raise TypeError("cached search query must be a string")
        return cls(query=query, results=SearchResult.from_dict(raw["results"]))


@dataclass(frozen=True)
class CacheStats:
    """Disk usage snapshot for one profile's cache. Derived, never persisted."""

    file_count: int = 0
    total_size_bytes: int = 0
    max_size_bytes: int = 0
    ttl_seconds: int = 0

    @property
    def usage_percent(self) -> float:
        if self.max_size_bytes == 0:
            return 0.0
        return self.total_size_bytes / self.max_size_bytes * 100.0

    @property
    def total_size_mb(self) -> float:
        return self.total_size_bytes / (1024 * 1024)

    @property
    def max_size_mb(self) -> float:
        return self.max_size_bytes / (1024 * 1024)

    @property
    def ttl_minutes(self) -> int:
        return self.ttl_seconds // 60

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_count": self.file_count,
            "total_size_bytes": self.total_size_bytes,
            "max_size_bytes": self.max_size_bytes,
            "ttl_seconds": self.ttl_seconds,
            "usage_percent": round(self.usage_percent, 2),
        }


class CacheStatus(str, Enum):
    """Where the data on screen came from."""

    FRESH = "fresh"
    FROM_CACHE = "from_cache"
    OFFLINE = "offline"

    @property
    def is_cached(self) -> bool:
        return self is not CacheStatus.FRESH

    @property
    def icon(self) -> str:
        return _STATUS_ICONS[self]

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_ICONS = {
    CacheStatus.FRESH: "●",
    CacheStatus.FROM_CACHE: "◐",
    CacheStatus.OFFLINE: "○",
}

_STATUS_LABELS = {
    CacheStatus.FRESH: "Live",
    CacheStatus.FROM_CACHE: "Cached",
    CacheStatus.OFFLINE: "Offline",
}
