"""
Payload records cached on behalf of the issue tracker client.

The network client produces these records; the cache stores them opaquely and
only needs them to round-trip through plain JSON-compatible dictionaries.

Classes:
    Issue: A single issue as returned by the tracker's issue endpoint
    SearchResult: One page of a search response with paging metadata

Example:
    >>> issue = Issue.from_dict({
    ...     "id": "10001", "key": "PROJ-1", "self": "https://jira/rest/api/3/issue/10001",
    ...     "fields": {"summary": "Crash on start", "status": {"name": "Open"}},
    ... })
    >>> issue.summary
    'Crash on start'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _named(value: Any) -> str | None:
    # Tracker fields like status/priority/issuetype are objects with a "name"
    if isinstance(value, dict):
        name = value.get("name") or value.get("displayName")
        return str(name) if name is not None else None
    return None


@dataclass(slots=True)
class Issue:
    """
    An issue record.

    Attributes:
        id: The tracker's internal issue ID
        key: The human-facing issue key (e.g. "PROJ-123")
        self_url: REST URL of the issue, serialized under the "self" key
        fields: Raw issue fields, kept verbatim
    """

    id: str
    key: str
    self_url: str = ""
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def summary(self) -> str:
        return str(self.fields.get("summary") or "")

    @property
    def status(self) -> str | None:
        return _named(self.fields.get("status"))

    @property
    def issue_type(self) -> str | None:
        return _named(self.fields.get("issuetype"))

    @property
    def priority(self) -> str | None:
        return _named(self.fields.get("priority"))

    @property
    def assignee(self) -> str | None:
        return _named(self.fields.get("assignee"))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "key": self.key, "self": self.self_url, "fields": self.fields}

    @classmethod
    def from_dict(cls, raw: Any) -> Issue:
        """Build an Issue from its wire form; raises on malformed input."""
        if not isinstance(raw, dict):
            raise TypeError(f"issue must be an object, got {type(raw).__name__}")
        fields = raw.get("fields", {})
        if not isinstance(fields, dict):
            raise TypeError("issue fields must be an object")
        return cls(
            id=str(raw["id"]),
            key=str(raw["key"]),
            self_url=str(raw.get("self", "")),
            fields=fields,
        )


@dataclass(slots=True)
class SearchResult:
    """
    One page of search results.

    Attributes:
        start_at: Index of the first issue in this page
        max_results: Page size that was requested
        total: Total number of matching issues
        issues: Issues on this page
        next_page_token: Cursor for token-based paging, if the server sent one
    """

    start_at: int = 0
    max_results: int = 0
    total: int = 0
    issues: list[Issue] = field(default_factory=list)
    next_page_token: str | None = None

    def has_more(self) -> bool:
        """Check if there are more pages of results."""
        if self.next_page_token:
            return True
        return self.start_at + len(self.issues) < self.total

    def next_start(self) -> int:
        """Get the starting index for the next page."""
        return self.start_at + len(self.issues)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "startAt": self.start_at,
            "maxResults": self.max_results,
            "total": self.total,
            "issues": [issue.to_dict() for issue in self.issues],
        }
        if self.next_page_token is not None:
            payload["nextPageToken"] = self.next_page_token
        return payload

    @classmethod
    def from_dict(cls, raw: Any) -> SearchResult:
        if not isinstance(raw, dict):
            raise TypeError(f"search result must be an object, got {type(raw).__name__}")
        issues = raw.get("issues", [])
        if not isinstance(issues, list):
            raise TypeError("search result issues must be a list")
        token = raw.get("nextPageToken")
        return cls(
            start_at=int(raw.get("startAt", 0)),
            max_results=int(raw.get("maxResults", 0)),
            total=int(raw.get("total", 0)),
            issues=[Issue.from_dict(item) for item in issues],
            next_page_token=str(token) if token is not None else None,
        )
