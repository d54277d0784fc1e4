"""
Configuration for the issuecache offline cache.

This module defines ``CacheConfig``, the settings a profile's cache manager is
built from: where the cache lives, how long entries stay fresh and how much
disk the cache may use.

Key Configuration Areas:
    - Location: application namespace and optional base directory override
    - Freshness: TTL in minutes (default 30)
    - Footprint: size budget in megabytes (default 100)

Environment overrides:
    ISSUECACHE_DIR            base directory holding per-profile caches
    ISSUECACHE_TTL_MINUTES    entry time-to-live in minutes
    ISSUECACHE_MAX_SIZE_MB    disk budget per profile in megabytes

Example:
    >>> from issuecache.config import CacheConfig
    >>> config = CacheConfig(ttl_minutes=10, max_size_mb=50)
    >>> config.ttl_seconds
    600
    >>> config.resolve_base_dir()  # doctest: +SKIP
    PosixPath('/home/me/.cache/issuecache')
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .error_handling import ConfigurationError

DEFAULT_APP_NAME = "issuecache"
DEFAULT_TTL_MINUTES = 30
DEFAULT_MAX_SIZE_MB = 100

ENV_PREFIX = "ISSUECACHE_"


def platform_cache_dir() -> Path:
    """Get the platform-specific user cache directory."""
    system = platform.system()
    if system == "Windows":
        base = os.environ.get("LOCALAPPDATA")
        return Path(base) if base else Path.home() / "AppData" / "Local"
    if system == "Darwin":
        return Path.home() / "Library" / "Caches"
    xdg = os.environ.get("XDG_CACHE_HOME")
    return Path(xdg).expanduser() if xdg else Path.home() / ".cache"


@dataclass(slots=True)
class CacheConfig:
    # Location
    app_name: str = DEFAULT_APP_NAME
    base_dir: Path | None = None  # None = <platform cache dir>/<app_name>

    # Freshness and footprint
    ttl_minutes: int = DEFAULT_TTL_MINUTES
    max_size_mb: int = DEFAULT_MAX_SIZE_MB

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_minutes * 60

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024

    def resolve_base_dir(self) -> Path:
        if self.base_dir is not None:
            return Path(self.base_dir).expanduser()
        return platform_cache_dir() / self.app_name

    def validate(self) -> None:
        if self.ttl_minutes < 0:
            raise ConfigurationError(
                f"TTL must be non-negative, got {self.ttl_minutes}",
                context={"ttl_minutes": self.ttl_minutes},
            )
        if self.max_size_mb < 0:
            raise ConfigurationError(
                f"Cache size budget must be non-negative, got {self.max_size_mb}",
                context={"max_size_mb": self.max_size_mb},
            )
        if not self.app_name or any(sep in self.app_name for sep in ("/", "\\")):
            raise ConfigurationError(f"Invalid application namespace: {self.app_name!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CacheConfig:
        """Build a config from defaults overridden by ISSUECACHE_* variables."""
        env = os.environ if environ is None else environ
        config = cls()

        base_dir = env.get(f"{ENV_PREFIX}DIR")
        if base_dir:
            config.base_dir = Path(base_dir)
        config.ttl_minutes = _env_int(env, "TTL_MINUTES", config.ttl_minutes)
        config.max_size_mb = _env_int(env, "MAX_SIZE_MB", config.max_size_mb)

        config.validate()
        return config


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}",
            context={"variable": f"{ENV_PREFIX}{name}"},
        ) from None
