"""Tests for issuecache.cache.models module."""

from __future__ import annotations

import time
from datetime import timedelta

import pytest

from issuecache.cache.models import CachedSearchResult, CacheEntry, CacheStats, CacheStatus
from issuecache.error_handling import CacheCorruptionError
from issuecache.types import Issue


class TestCacheEntry:
    """Tests for the CacheEntry envelope."""

    def test_new_stamps_timestamps(self):
        entry = CacheEntry.new({"a": 1}, ttl_seconds=1800, now=1_700_000_000)
        assert entry.cached_at == 1_700_000_000
        assert entry.expires_at == 1_700_001_800
        assert entry.data == {"a": 1}

    def test_new_uses_wall_clock(self):
        before = int(time.time())
        entry = CacheEntry.new("x", ttl_seconds=60)
        after = int(time.time())
        assert before <= entry.cached_at <= after
        assert entry.expires_at - entry.cached_at == 60

    def test_fresh_entry_not_expired(self):
        entry = CacheEntry.new("x", ttl_seconds=3600)
        assert entry.is_expired is False
        assert entry.time_remaining > timedelta(minutes=59)

    def test_old_entry_expired(self):
        old = int(time.time()) - 7200
        entry = CacheEntry.new("x", ttl_seconds=3600, now=old)
        assert entry.is_expired is True
        assert entry.time_remaining == timedelta(0)
        assert entry.age >= timedelta(hours=2)

    def test_age_clamped_for_future_timestamp(self):
        future = int(time.time()) + 10_000
        entry = CacheEntry(data="x", cached_at=future, expires_at=future + 60)
        assert entry.age == timedelta(0)

    def test_far_future_expiry_saturates(self):
        entry = CacheEntry(data="x", cached_at=0, expires_at=2**63)
        assert entry.time_remaining == timedelta(days=timedelta.max.days)

    def test_far_future_write_time_does_not_overflow_age(self):
        entry = CacheEntry.from_dict({"data": "x", "cached_at": 2**63, "expires_at": 2**64})
        assert entry.age == timedelta(0)
        assert entry.time_remaining == timedelta(days=timedelta.max.days)

    def test_negative_ttl_treated_as_zero(self):
        entry = CacheEntry.new("x", ttl_seconds=-5, now=100)
        assert entry.expires_at == 100

    def test_to_dict_with_encoder(self):
        issue = Issue(id="1", key="PROJ-1", self_url="u", fields={"summary": "s"})
        entry = CacheEntry.new(issue, ttl_seconds=10, now=5)
        assert entry.to_dict(Issue.to_dict) == {
            "data": {"id": "1", "key": "PROJ-1", "self": "u", "fields": {"summary": "s"}},
            "cached_at": 5,
            "expires_at": 15,
        }

    def test_from_dict_with_decoder(self):
        raw = {
            "data": {"id": "1", "key": "PROJ-1", "self": "u", "fields": {}},
            "cached_at": 5,
            "expires_at": 15,
        }
        entry = CacheEntry.from_dict(raw, Issue.from_dict)
        assert isinstance(entry.data, Issue)
        assert entry.data.key == "PROJ-1"
        assert entry.cached_at == 5

    @pytest.mark.parametrize(
        "raw",
        [
            [],
            "text",
            {"cached_at": 1, "expires_at": 2},
            {"data": 1, "expires_at": 2},
            {"data": 1, "cached_at": "1", "expires_at": 2},
            {"data": 1, "cached_at": 1, "expires_at": -2},
            {"data": 1, "cached_at": True, "expires_at": 2},
            {"data": 1, "cached_at": 1.5, "expires_at": 2},
        ],
    )
    def test_from_dict_rejects_malformed_envelope(self, raw):
        with pytest.raises(CacheCorruptionError):
            CacheEntry.from_dict(raw)

    def test_from_dict_wraps_payload_errors(self):
        raw = {"data": {"key": "missing id"}, "cached_at": 1, "expires_at": 2}
        with pytest.raises(CacheCorruptionError, match="invalid payload"):
            CacheEntry.from_dict(raw, Issue.from_dict)


class TestCachedSearchResult:
    """Tests for CachedSearchResult."""

    def test_roundtrip_keeps_query(self, sample_results):
        cached = CachedSearchResult(query="project = PROJ", results=sample_results)
        restored = CachedSearchResult.from_dict(cached.to_dict())
        assert restored == cached

    def test_rejects_non_string_query(self, sample_results):
        with pytest.raises(TypeError):
            CachedSearchResult.from_dict({"query": 7, "results": sample_results.to_dict()})


class TestCacheStats:
    """Tests for CacheStats."""

    def test_defaults(self):
        stats = CacheStats()
        assert stats.file_count == 0
        assert stats.usage_percent == 0.0

    def test_usage_percent(self):
        stats = CacheStats(file_count=3, total_size_bytes=25, max_size_bytes=100, ttl_seconds=1800)
        assert stats.usage_percent == 25.0
        assert stats.ttl_minutes == 30

    def test_usage_percent_zero_budget(self):
        stats = CacheStats(file_count=1, total_size_bytes=500, max_size_bytes=0)
        assert stats.usage_percent == 0.0

    def test_megabyte_views(self):
        stats = CacheStats(total_size_bytes=5 * 1024 * 1024, max_size_bytes=100 * 1024 * 1024)
        assert stats.total_size_mb == 5.0
        assert stats.max_size_mb == 100.0

    def test_to_dict(self):
        stats = CacheStats(file_count=2, total_size_bytes=1, max_size_bytes=3, ttl_seconds=60)
        data = stats.to_dict()
        assert data["file_count"] == 2
        assert data["usage_percent"] == 33.33


class TestCacheStatus:
    """Tests for CacheStatus."""

    def test_is_cached(self):
        assert CacheStatus.FRESH.is_cached is False
        assert CacheStatus.FROM_CACHE.is_cached is True
        assert CacheStatus.OFFLINE.is_cached is True

    def test_display_mapping_complete(self):
        for status in CacheStatus:
            assert status.icon
            assert status.label

    def test_labels(self):
        assert CacheStatus.FROM_CACHE.label == "Cached"
        assert CacheStatus.OFFLINE.label == "Offline"
