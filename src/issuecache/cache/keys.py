"""
Cache key derivation.

Maps a cache subject to its file under a profile's cache root:

    issues/<sanitized-issue-id>.json        direct, human-readable mapping
    search_results/<xxh64-of-query>.json    content-addressed mapping

All functions are pure; nothing here touches the filesystem.
"""

from __future__ import annotations

from pathlib import Path

import xxhash

ISSUES_DIR = "issues"
SEARCH_RESULTS_DIR = "search_results"
ENTRY_SUFFIX = ".json"

_UNSAFE_FILENAME_CHARS = '/\\:*?"<>|'
_SANITIZE_TABLE = str.maketrans({ch: "_" for ch in _UNSAFE_FILENAME_CHARS})


def sanitize_issue_id(issue_id: str) -> str:
    """Replace characters that are unsafe in filenames with underscores."""
    return issue_id.translate(_SANITIZE_TABLE)


def query_hash(query: str) -> str:
    """64-bit xxHash of the exact query text as 16 lowercase hex digits."""
    return xxhash.xxh64_hexdigest(query.encode("utf-8"))


def issue_path(root: Path, issue_id: str) -> Path:
    return root / ISSUES_DIR / f"{sanitize_issue_id(issue_id)}{ENTRY_SUFFIX}"


def search_results_path(root: Path, query: str) -> Path:
    return root / SEARCH_RESULTS_DIR / f"{query_hash(query)}{ENTRY_SUFFIX}"
