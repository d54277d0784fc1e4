"""
Disk budget enforcement for a profile's cache.

After every successful write the manager asks the policy to check the cache
root. When the total size of all files exceeds the budget, the oldest quarter
of files (by modification time, at least one) is deleted in a single batch.
Recency is write recency: reads never touch files, so this is not true LRU.

Classes:
    EvictionResult: Outcome of one enforcement pass
    EvictionPolicy: Size check and batch eviction for one cache root
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from ..error_handling import ErrorInfo, handle_file_error
from ..logging_config import get_logger
from .statistics import iter_cache_files

EVICTION_FRACTION = 4  # evict ceil(count / EVICTION_FRACTION) files per pass


@dataclass
class EvictionResult:
    """Outcome of one eviction check."""

    triggered: bool = False
    files_scanned: int = 0
    files_removed: int = 0
    size_before: int = 0
    size_after: int = 0
    failures: list[ErrorInfo] = field(default_factory=list)

    @property
    def bytes_freed(self) -> int:
        return max(0, self.size_before - self.size_after)


class EvictionPolicy:
    """
    Keeps one cache root under its size budget.

    Best-effort: unreadable files are skipped during the scan and per-file
    deletion failures are logged and recorded, never raised.
    """

    def __init__(self, root: Path, max_size_bytes: int) -> None:
        self.root = root
        self.max_size_bytes = max_size_bytes
        self.logger = get_logger()

    def total_size(self) -> int:
        """Sum of the sizes of all files under the root."""
        return sum(st.st_size for _path, st in iter_cache_files(self.root))

    def enforce(self) -> EvictionResult:
        """
        Evict the oldest files if the root is over budget.

        Returns:
            EvictionResult describing what was scanned and removed
        """
        size_before = self.total_size()
        result = EvictionResult(size_before=size_before, size_after=size_before)
        if size_before <= self.max_size_bytes:
            return result

        result.triggered = True
        files = sorted(
            ((st.st_mtime, path, st.st_size) for path, st in iter_cache_files(self.root)),
            key=lambda item: (item[0], str(item[1])),
        )
        result.files_scanned = len(files)
        if not files:
            return result

        to_remove = max(1, math.ceil(len(files) / EVICTION_FRACTION))
        freed = 0
        for _mtime, path, size in files[:to_remove]:
            try:
                path.unlink()
            except FileNotFoundError:
                # Already gone; a concurrent pass or invalidation got there first
                continue
            except OSError as e:
                result.failures.append(handle_file_error(path, "evict", e, self.logger))
                continue
            result.files_removed += 1
            freed += size

        result.size_after = max(0, size_before - freed)
        self.logger.log_eviction(
            result.files_removed,
            result.size_before,
            result.size_after,
            cache_root=str(self.root),
            failures=len(result.failures),
        )
        return result
