"""
Command-line interface for issuecache.

This module provides maintenance commands for a profile's offline cache: usage
statistics, inspecting cached entries, invalidation and clearing. The terminal
client itself uses the library API; this CLI exists for debugging and for
scripted cleanup.

Main Commands:
    stats: Show file count, size and budget usage
    show-issue: Print a cached issue as JSON
    show-search: Print cached results for a query as JSON
    invalidate: Drop one cached issue
    invalidate-search: Drop all cached search results
    purge: Remove expired and unreadable entries
    clear: Delete the profile's entire cache

Example Usage:
    $ issuecache --profile work stats --format rich
    $ issuecache --profile work show-issue PROJ-123
    $ issuecache --profile work --base-dir /tmp/cache clear
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ..cache.manager import CacheManager
from ..config import CacheConfig
from ..error_handling import ConfigurationError
from ..formatter import (
    format_stats_text,
    render_stats_console,
    stats_to_json_bytes,
    to_json_bytes,
)
from ..logging_config import (
    LogFormat,
    LogLevel,
    configure_logging,
    disable_logging,
    enable_debug_logging,
)


@click.group()
@click.option("--profile", required=True, help="Profile whose cache to operate on")
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding per-profile caches (default: platform cache dir)",
)
@click.option("--ttl-minutes", type=int, default=None, help="Entry time-to-live in minutes")
@click.option("--max-size-mb", type=int, default=None, help="Disk budget in megabytes")
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.option("--quiet", is_flag=True, default=False, help="Suppress all log output")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Log file path")
@click.option(
    "--log-format",
    type=click.Choice([f.value for f in LogFormat]),
    default=LogFormat.SIMPLE.value,
    help="Log output format",
)
@click.pass_context
def cli(
    ctx: click.Context,
    profile: str,
    base_dir: Path | None,
    ttl_minutes: int | None,
    max_size_mb: int | None,
    debug: bool,
    quiet: bool,
    log_file: Path | None,
    log_format: str,
) -> None:
    """issuecache - offline cache maintenance for issue tracker profiles"""
    configure_logging(
        level=LogLevel.WARNING,
        format_type=LogFormat(log_format),
        log_file=log_file,
        enable_file=log_file is not None,
        enable_console=True,
    )
    if debug:
        enable_debug_logging()
    elif quiet:
        disable_logging()

    try:
        config = CacheConfig.from_env()
        if base_dir is not None:
            config.base_dir = base_dir
        if ttl_minutes is not None:
            config.ttl_minutes = ttl_minutes
        if max_size_mb is not None:
            config.max_size_mb = max_size_mb
        ctx.obj = CacheManager.from_config(profile, config)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)


@cli.command("stats")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json", "rich"]),
    default="text",
    help="Output format",
)
@click.pass_obj
def stats_cmd(manager: CacheManager, fmt: str) -> None:
    """Show cache usage for the profile."""
    stats = manager.stats()
    if fmt == "json":
        click.echo(stats_to_json_bytes(stats).decode("utf-8"))
    elif fmt == "rich":
        render_stats_console(stats, manager.profile)
    else:
        click.echo(f"profile: {manager.profile}")
        click.echo(f"path:   {manager.cache_dir}")
        click.echo(format_stats_text(stats))


@cli.command("show-issue")
@click.argument("issue_id")
@click.pass_obj
def show_issue_cmd(manager: CacheManager, issue_id: str) -> None:
    """Print a cached issue as JSON."""
    issue = manager.get_issue(issue_id)
    if issue is None:
        click.echo(f"Not cached: {issue_id}", err=True)
        sys.exit(1)
    click.echo(to_json_bytes(issue).decode("utf-8"))


@cli.command("show-search")
@click.argument("query")
@click.pass_obj
def show_search_cmd(manager: CacheManager, query: str) -> None:
    """Print cached search results for an exact query as JSON."""
    cached = manager.get_search_results(query)
    if cached is None:
        click.echo(f"Not cached: {query}", err=True)
        sys.exit(1)
    click.echo(to_json_bytes(cached).decode("utf-8"))


@cli.command("invalidate")
@click.argument("issue_id")
@click.pass_obj
def invalidate_cmd(manager: CacheManager, issue_id: str) -> None:
    """Drop one cached issue."""
    manager.invalidate_issue(issue_id)
    click.echo(f"Invalidated {issue_id}")


@cli.command("invalidate-search")
@click.pass_obj
def invalidate_search_cmd(manager: CacheManager) -> None:
    """Drop every cached search result."""
    manager.invalidate_search_results()
    click.echo("Invalidated cached search results")


@cli.command("purge")
@click.pass_obj
def purge_cmd(manager: CacheManager) -> None:
    """Remove expired and unreadable entries."""
    removed = manager.purge_expired()
    click.echo(f"Removed {removed} stale entries")


@cli.command("clear")
@click.confirmation_option(prompt="Delete the entire cache for this profile?")
@click.pass_obj
def clear_cmd(manager: CacheManager) -> None:
    """Delete the profile's entire cache."""
    manager.clear()
    click.echo(f"Cleared cache for {manager.profile}")


def main() -> None:
    cli(prog_name="issuecache")


if __name__ == "__main__":
    main()
