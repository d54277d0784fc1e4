"""
Cache usage reporting.

This module walks a profile's cache tree to report how many entry files it
holds and how much disk they use. Reports are recomputed from the filesystem
on every call; nothing is tracked in memory between calls.

Classes:
    StatsReporter: Produces CacheStats snapshots for one cache root

Functions:
    iter_cache_files: Walk a cache root yielding files with their stat results
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from .models import CacheStats


def iter_cache_files(root: Path) -> Iterator[tuple[Path, os.stat_result]]:
    """
    Yield every regular file under ``root`` with its stat result.

    Files that vanish or cannot be stat'ed between listing and stat are
    skipped, as are unreadable directories. A missing root yields nothing.
    """
    if not root.is_dir():
        return

    for dirpath, _dirnames, filenames in os.walk(root):
        for name in filenames:
            path = Path(dirpath) / name
            try:
                st = path.stat()
            except OSError:
                continue
            yield path, st


class StatsReporter:
    """
    Read-only usage reporter for one profile's cache root.
    """

    def __init__(self, root: Path, max_size_bytes: int, ttl_seconds: int) -> None:
        self.root = root
        self.max_size_bytes = max_size_bytes
        self.ttl_seconds = ttl_seconds

    def collect(self) -> CacheStats:
        """
        Walk the cache root once and count files and bytes.

        Returns:
            CacheStats snapshot; zero-valued if the root does not exist
        """
        file_count = 0
        total_size = 0
        for _path, st in iter_cache_files(self.root):
            file_count += 1
            total_size += st.st_size

        return CacheStats(
            file_count=file_count,
            total_size_bytes=total_size,
            max_size_bytes=self.max_size_bytes,
            ttl_seconds=self.ttl_seconds,
        )

    def get_summary(self) -> str:
        """
        Get a human-readable usage summary.

        Returns:
            Formatted string with key usage metrics
        """
        stats = self.collect()
        return (
            f"Cache usage: "
            f"{stats.file_count} files, "
            f"{stats.total_size_mb:.1f} / {stats.max_size_mb:.1f} MB "
            f"({stats.usage_percent:.1f}%), "
            f"TTL {stats.ttl_minutes} min"
        )
