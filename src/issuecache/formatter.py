from __future__ import annotations

from typing import Any

import orjson
from rich.console import Console
from rich.table import Table

from .cache.models import CachedSearchResult, CacheStats, CacheStatus
from .types import Issue


def stats_to_json_bytes(stats: CacheStats) -> bytes:
    return orjson.dumps(stats.to_dict(), option=orjson.OPT_INDENT_2)


def to_json_bytes(payload: Issue | CachedSearchResult) -> bytes:
    data: Any = payload.to_dict()
    return orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)


def format_stats_text(stats: CacheStats) -> str:
    out = [
        f"files:  {stats.file_count}",
        f"size:   {stats.total_size_mb:.2f} MB / {stats.max_size_mb:.2f} MB ({stats.usage_percent:.1f}%)",
        f"ttl:    {stats.ttl_minutes} min",
    ]
    return "\n".join(out)


def render_stats_console(stats: CacheStats, profile: str, console: Console | None = None) -> None:
    console = console or Console()
    table = Table(title=f"Cache: {profile}", show_header=False)
    table.add_column("metric", style="bold")
    table.add_column("value", justify="right")
    table.add_row("Files", str(stats.file_count))
    table.add_row("Size", f"{stats.total_size_mb:.2f} MB")
    table.add_row("Budget", f"{stats.max_size_mb:.2f} MB")
    usage_style = "red" if stats.usage_percent >= 90 else "green"
    table.add_row("Usage", f"[{usage_style}]{stats.usage_percent:.1f}%[/{usage_style}]")
    table.add_row("TTL", f"{stats.ttl_minutes} min")
    console.print(table)


def format_cache_status(status: CacheStatus | None) -> str:
    if status is None:
        return ""
    return f"{status.icon} {status.label}"
