"""
Shared test fixtures and utilities for issuecache tests.

This module provides common fixtures, sample payloads, and helper functions
to keep the cache tests short and consistent.
"""

from pathlib import Path

import pytest

from issuecache import CacheManager, Issue, SearchResult

SAMPLE_ISSUE_FIELDS = {
    "summary": "Login page crashes on submit",
    "status": {"name": "In Progress"},
    "issuetype": {"name": "Bug"},
    "priority": {"name": "High"},
    "assignee": {"displayName": "Sam Doe"},
    "labels": ["frontend", "regression"],
    "description": "Steps:\n1. open /login\n2. submit",
}


def make_issue(key: str = "PROJ-1", summary: str | None = None, **fields) -> Issue:
    """Create an Issue with realistic fields."""
    data = dict(SAMPLE_ISSUE_FIELDS)
    if summary is not None:
        data["summary"] = summary
    data.update(fields)
    number = key.rsplit("-", 1)[-1]
    return Issue(
        id=f"100{number}" if number.isdigit() else "10000",
        key=key,
        self_url=f"https://tracker.example.com/rest/api/3/issue/{key}",
        fields=data,
    )


def make_search_result(*keys: str, total: int | None = None) -> SearchResult:
    """Create a SearchResult page holding the given issue keys."""
    issues = [make_issue(key) for key in keys]
    return SearchResult(
        start_at=0,
        max_results=50,
        total=len(issues) if total is None else total,
        issues=issues,
    )


@pytest.fixture
def cache_base(tmp_path: Path) -> Path:
    """Base directory shared by all profiles in a test."""
    return tmp_path / "cache"


@pytest.fixture
def manager(cache_base: Path) -> CacheManager:
    """A manager for the "work" profile with default TTL and budget."""
    return CacheManager("work", base_dir=cache_base)


@pytest.fixture
def issue_factory():
    """Provide make_issue to tests."""
    return make_issue


@pytest.fixture
def results_factory():
    """Provide make_search_result to tests."""
    return make_search_result


@pytest.fixture
def sample_issue() -> Issue:
    return make_issue("PROJ-123")


@pytest.fixture
def sample_results() -> SearchResult:
    return make_search_result("PROJ-1", "PROJ-2", "PROJ-3", total=10)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer to run")
    config.addinivalue_line("markers", "cache: Cache-related tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
