"""
Cache manager for one profile's offline cache.

This module provides the interface the client uses to cache fetched issues
and search results on disk, so that data can be shown without a network round
trip and refreshed in the background.

Classes:
    CacheManager: Read, write, invalidate and clear one profile's cache

Features:
    - Per-profile directories; profiles never share files
    - TTL expiry checked on every read
    - Self-healing reads: corrupt, foreign or expired files are deleted
    - Disk budget enforced after every write
    - Filesystem is the only state; no in-memory index, no locks

Reads never raise: every failure degrades to a miss. Writes raise
``CacheWriteError`` so callers know the entry did not persist, but callers
should treat that as non-fatal since the cache only saves round trips.
All calls block on local disk I/O; async callers should offload them to a
thread.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import orjson

from ..config import DEFAULT_MAX_SIZE_MB, DEFAULT_TTL_MINUTES, CacheConfig
from ..error_handling import (
    CacheCorruptionError,
    CacheWriteError,
    ConfigurationError,
    ErrorCategory,
    classify_error,
    handle_file_error,
)
from ..logging_config import get_logger
from ..types import Issue, SearchResult
from .eviction import EvictionPolicy, EvictionResult
from .keys import ENTRY_SUFFIX, SEARCH_RESULTS_DIR, issue_path, search_results_path
from .models import CachedSearchResult, CacheEntry, CacheStats
from .statistics import StatsReporter, iter_cache_files

T = TypeVar("T")


class CacheManager:
    """
    Offline cache for a single profile.

    Layout under ``base_dir``::

        <profile>/issues/<sanitized-id>.json
        <profile>/search_results/<16-hex-hash>.json
    """

    def __init__(
        self,
        profile: str,
        base_dir: Path | str | None = None,
        ttl_seconds: int = DEFAULT_TTL_MINUTES * 60,
        max_size_bytes: int = DEFAULT_MAX_SIZE_MB * 1024 * 1024,
    ):
        """
        Initialize cache manager.

        Args:
            profile: Profile name; becomes the cache subdirectory
            base_dir: Directory holding all profiles (platform cache dir if None)
            ttl_seconds: Time-to-live of new entries in seconds
            max_size_bytes: Disk budget for this profile

        Raises:
            ConfigurationError: If the profile name, TTL or budget is invalid
        """
        if not profile or profile in (".", "..") or any(sep in profile for sep in ("/", "\\")):
            raise ConfigurationError(f"Invalid profile name: {profile!r}")
        if ttl_seconds < 0 or max_size_bytes < 0:
            raise ConfigurationError(
                "TTL and cache size budget must be non-negative",
                context={"ttl_seconds": ttl_seconds, "max_size_bytes": max_size_bytes},
            )

        if base_dir is None:
            base_dir = CacheConfig().resolve_base_dir()

        self.profile = profile
        self.base_dir = Path(base_dir)
        self.ttl_seconds = ttl_seconds
        self.max_size_bytes = max_size_bytes
        self.logger = get_logger()

        self.eviction = EvictionPolicy(self.cache_dir, max_size_bytes)
        self.reporter = StatsReporter(self.cache_dir, max_size_bytes, ttl_seconds)
        self.last_eviction: EvictionResult | None = None

    @classmethod
    def from_settings(
        cls,
        profile: str,
        ttl_minutes: int = DEFAULT_TTL_MINUTES,
        max_size_mb: int = DEFAULT_MAX_SIZE_MB,
        base_dir: Path | str | None = None,
    ) -> CacheManager:
        """Build a manager from user-facing settings (minutes and megabytes)."""
        config = CacheConfig(
            base_dir=Path(base_dir) if base_dir is not None else None,
            ttl_minutes=ttl_minutes,
            max_size_mb=max_size_mb,
        )
        return cls.from_config(profile, config)

    @classmethod
    def from_config(cls, profile: str, config: CacheConfig) -> CacheManager:
        config.validate()
        return cls(
            profile,
            base_dir=config.resolve_base_dir(),
            ttl_seconds=config.ttl_seconds,
            max_size_bytes=config.max_size_bytes,
        )

    @property
    def cache_dir(self) -> Path:
        """Root of this profile's cache."""
        return self.base_dir / self.profile

    # Issues

    def get_issue(self, issue_id: str) -> Issue | None:
        """
        Get a cached issue.

        Args:
            issue_id: Issue key or ID, unsanitized

        Returns:
            The cached Issue if present and fresh, None otherwise
        """
        return self._read(issue_path(self.cache_dir, issue_id), Issue.from_dict, "issue")

    def set_issue(self, issue: Issue, issue_id: str | None = None) -> None:
        """
        Cache an issue under its key (or an explicit ID).

        Raises:
            CacheWriteError: If the entry could not be written
        """
        path = issue_path(self.cache_dir, issue_id if issue_id is not None else issue.key)
        self._write(path, issue, Issue.to_dict)

    def invalidate_issue(self, issue_id: str) -> None:
        """Remove one issue from the cache; no-op if it is not cached."""
        self._remove_file(issue_path(self.cache_dir, issue_id), "invalidate")

    # Search results

    def get_search_results(self, query: str) -> CachedSearchResult | None:
        """
        Get cached results for an exact query string.

        Returns:
            CachedSearchResult if present and fresh, None otherwise
        """
        return self._read(
            search_results_path(self.cache_dir, query),
            CachedSearchResult.from_dict,
            "search_results",
        )

    def set_search_results(self, query: str, results: SearchResult) -> None:
        """
        Cache a search response for a query string.

        Raises:
            CacheWriteError: If the entry could not be written
        """
        self._write(
            search_results_path(self.cache_dir, query),
            CachedSearchResult(query=query, results=results),
            CachedSearchResult.to_dict,
        )

    def invalidate_search_results(self) -> None:
        """Drop every cached search result for this profile."""
        self._remove_tree(self.cache_dir / SEARCH_RESULTS_DIR)

    # Whole cache

    def clear(self) -> None:
        """Delete this profile's entire cache."""
        self._remove_tree(self.cache_dir)
        self.logger.info(f"Cache cleared for profile {self.profile}", profile=self.profile)

    def purge_expired(self) -> int:
        """
        Remove expired and unreadable entries.

        Returns:
            Number of files removed
        """
        removed = 0
        for path, _st in list(iter_cache_files(self.cache_dir)):
            if path.suffix != ENTRY_SUFFIX:
                continue
            try:
                entry = CacheEntry.from_dict(orjson.loads(path.read_bytes()))
            except FileNotFoundError:
                continue
            except (OSError, orjson.JSONDecodeError, CacheCorruptionError):
                entry = None
            if (entry is None or entry.is_expired) and self._remove_file(path, "purge"):
                removed += 1

        if removed > 0:
            self.logger.debug(f"Purged {removed} stale cache entries", profile=self.profile)
        return removed

    def stats(self) -> CacheStats:
        """Current usage snapshot for this profile."""
        return self.reporter.collect()

    # Read/write paths

    def _read(self, path: Path, decode: Callable[[Any], T], kind: str) -> T | None:
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            self.logger.log_cache_miss(kind, str(path), "absent")
            return None
        except (OSError, ValueError) as e:
            # ValueError: the path itself is unusable (e.g. an id with a NUL byte)
            self.logger.log_entry_discarded(str(path), f"unreadable: {e}")
            self._remove_file(path, "discard")
            return None

        try:
            entry = CacheEntry.from_dict(orjson.loads(raw), decode)
        except (orjson.JSONDecodeError, CacheCorruptionError) as e:
            self.logger.log_entry_discarded(str(path), f"corrupt: {e}")
            self._remove_file(path, "discard")
            return None

        if entry.is_expired:
            self.logger.log_cache_miss(kind, str(path), "expired")
            self._remove_file(path, "expire")
            return None

        self.logger.log_cache_hit(kind, str(path))
        return entry.data

    def _write(self, path: Path, data: T, encode: Callable[[T], Any]) -> None:
        entry = CacheEntry.new(data, self.ttl_seconds)

        try:
            payload = orjson.dumps(entry.to_dict(encode))
        except (TypeError, ValueError) as e:
            raise CacheWriteError(
                f"Cannot serialize cache entry: {e}", path, category=classify_error(e)
            ) from e

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._replace_file(path, payload)
        except (OSError, ValueError) as e:
            category = classify_error(e) if isinstance(e, OSError) else ErrorCategory.FILE_ACCESS
            raise CacheWriteError(f"Cannot write cache entry: {e}", path, category=category) from e

        try:
            self.last_eviction = self.eviction.enforce()
        except OSError as e:
            handle_file_error(self.cache_dir, "evict", e, self.logger)

    @staticmethod
    def _replace_file(path: Path, payload: bytes) -> None:
        # Write a sibling temp file, then swap it in so readers never see half an entry
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def _remove_file(self, path: Path, operation: str) -> bool:
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except (OSError, ValueError) as e:
            handle_file_error(path, operation, e, self.logger)
            return False

    def _remove_tree(self, path: Path) -> None:
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return
        except OSError as e:
            handle_file_error(path, "remove", e, self.logger)

    def __repr__(self) -> str:
        return (
            f"CacheManager(profile={self.profile!r}, cache_dir={str(self.cache_dir)!r}, "
            f"ttl_seconds={self.ttl_seconds}, max_size_bytes={self.max_size_bytes})"
        )
