"""
Command-line interface for issuecache.

Maintenance commands for inspecting and pruning a profile's offline cache.
"""

from .main import (
    clear_cmd,
    cli,
    invalidate_cmd,
    invalidate_search_cmd,
    main,
    purge_cmd,
    show_issue_cmd,
    show_search_cmd,
    stats_cmd,
)

__all__ = [
    "main",
    "cli",
    "stats_cmd",
    "show_issue_cmd",
    "show_search_cmd",
    "invalidate_cmd",
    "invalidate_search_cmd",
    "purge_cmd",
    "clear_cmd",
]
