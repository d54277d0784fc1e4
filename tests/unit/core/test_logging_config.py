"""Tests for issuecache.logging_config module."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from issuecache import logging_config
from issuecache.logging_config import (
    CacheLogger,
    LogFormat,
    LogLevel,
    configure_logging,
    disable_logging,
    enable_debug_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _reset_global_logger(monkeypatch):
    monkeypatch.setattr(logging_config, "_global_logger", None)


def _file_logger(tmp_path: Path, name: str, fmt: LogFormat, level=LogLevel.DEBUG) -> CacheLogger:
    return CacheLogger(
        name=name,
        level=level,
        format_type=fmt,
        log_file=tmp_path / "logs" / "cache.log",
        enable_console=False,
        enable_file=True,
    )


def _lines(tmp_path: Path) -> list[str]:
    return (tmp_path / "logs" / "cache.log").read_text(encoding="utf-8").splitlines()


class TestLogEnums:
    def test_levels(self):
        assert LogLevel.DEBUG == "DEBUG"
        assert LogLevel.WARNING == "WARNING"

    def test_formats(self):
        assert LogFormat.SIMPLE == "simple"
        assert LogFormat.JSON == "json"
        assert LogFormat.STRUCTURED == "structured"


class TestCacheLogger:
    """Tests for CacheLogger class."""

    def test_init_default(self):
        logger = CacheLogger()
        assert logger.name == "issuecache"
        assert logger.level == LogLevel.WARNING
        assert logger.logger.propagate is False

    def test_null_handler_when_no_output(self):
        logger = CacheLogger(name="issuecache.test.silent", enable_console=False)
        assert len(logger.logger.handlers) == 1
        assert isinstance(logger.logger.handlers[0], logging.NullHandler)

    def test_reconfigure_replaces_handlers(self):
        CacheLogger(name="issuecache.test.replace")
        logger = CacheLogger(name="issuecache.test.replace")
        assert len(logger.logger.handlers) == 1

    def test_file_logging_creates_directory(self, tmp_path: Path):
        logger = _file_logger(tmp_path, "issuecache.test.file", LogFormat.SIMPLE)
        logger.info("hello")
        assert _lines(tmp_path) == ["INFO: hello"]

    def test_level_filters(self, tmp_path: Path):
        logger = _file_logger(tmp_path, "issuecache.test.level", LogFormat.SIMPLE, LogLevel.WARNING)
        logger.info("quiet")
        logger.warning("loud")
        assert _lines(tmp_path) == ["WARNING: loud"]

    def test_json_format_includes_extra_fields(self, tmp_path: Path):
        logger = _file_logger(tmp_path, "issuecache.test.json", LogFormat.JSON)
        logger.log_cache_miss("issue", "/tmp/x.json", "expired")

        entry = json.loads(_lines(tmp_path)[0])
        assert entry["level"] == "DEBUG"
        assert entry["operation"] == "cache_miss"
        assert entry["reason"] == "expired"
        assert entry["cache_path"] == "/tmp/x.json"
        assert "args" not in entry

    def test_structured_format(self, tmp_path: Path):
        logger = _file_logger(tmp_path, "issuecache.test.structured", LogFormat.STRUCTURED)
        logger.log_eviction(3, 1000, 700)

        line = _lines(tmp_path)[0]
        assert "[INFO]" in line
        assert "Evicted 3 cache files" in line
        assert "files_removed=3" in line
        assert "size_after=700" in line

    def test_log_file_error_operation(self, tmp_path: Path):
        logger = _file_logger(tmp_path, "issuecache.test.fileerr", LogFormat.JSON)
        logger.log_file_error("/cache/a.json", "denied", operation="evict")

        entry = json.loads(_lines(tmp_path)[0])
        assert entry["operation"] == "evict"
        assert entry["file_path"] == "/cache/a.json"
        assert "during evict" in entry["message"]

    def test_entry_discarded_is_warning(self, tmp_path: Path):
        logger = _file_logger(tmp_path, "issuecache.test.discard", LogFormat.JSON, LogLevel.WARNING)
        logger.log_cache_hit("issue", "/c/a.json")
        logger.log_entry_discarded("/c/b.json", "corrupt")

        lines = _lines(tmp_path)
        assert len(lines) == 1
        assert json.loads(lines[0])["reason"] == "corrupt"


class TestGlobalLogger:
    def test_get_logger_singleton(self):
        assert get_logger() is get_logger()

    def test_configure_logging_replaces_global(self):
        configured = configure_logging(level=LogLevel.ERROR, enable_console=False)
        assert get_logger() is configured
        assert configured.logger.level == logging.ERROR

    def test_disable_logging(self):
        configure_logging(enable_console=False)
        disable_logging()
        assert get_logger().logger.level > logging.CRITICAL

    def test_enable_debug_logging(self):
        configure_logging(level=LogLevel.WARNING)
        enable_debug_logging()
        logger = get_logger()
        assert logger.level == LogLevel.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.logger.handlers)
