"""
Error handling for the issuecache offline cache.

The cache is never on the critical path of the client: reads, invalidation
and eviction absorb their failures and degrade to "nothing cached", while
writes surface a ``CacheWriteError`` so the caller knows the entry did not
persist. This module provides the error taxonomy shared by both sides.

Error Categories:
    - FILE_ACCESS: Missing files, directories in the way, vanished entries
    - PERMISSION: Filesystem permission problems
    - SERIALIZATION: Corrupt or foreign cache content, unserializable payloads
    - DISK_SPACE: Disk full or quota exceeded
    - CONFIGURATION: Invalid profile name, TTL or size budget

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    CacheError: Base exception class for cache errors

Functions:
    classify_error: Map a built-in exception onto an ErrorCategory
    handle_file_error: Classify, record and log a per-file failure

Example:
    >>> from issuecache.error_handling import CacheWriteError
    >>> try:
    ...     manager.set_issue(issue)
    ... except CacheWriteError as e:
    ...     print(f"not cached: {e.message} ({e.category.value})")
"""

from __future__ import annotations

import errno
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

# EDQUOT is missing on Windows
_DISK_SPACE_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    SERIALIZATION = "serialization"
    DISK_SPACE = "disk_space"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: Path | None = None
    operation: str | None = None
    exception_type: str | None = None
    timestamp: float = field(default_factory=time.time)
    context: dict[str, Any] = field(default_factory=dict)


class CacheError(Exception):
    """Base exception for cache errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: Path | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: Path | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}
        self.timestamp: float = time.time()


class CacheWriteError(CacheError):
    """A cache entry could not be persisted."""

    def __init__(
        self,
        message: str,
        file_path: Path,
        category: ErrorCategory = ErrorCategory.FILE_ACCESS,
        context: dict[str, Any] | None = None,
    ) -> None:
        suggestions = {
            ErrorCategory.PERMISSION: ["Check permissions on the cache directory"],
            ErrorCategory.DISK_SPACE: ["Free disk space or lower the cache size budget"],
            ErrorCategory.SERIALIZATION: ["Check that the payload is JSON serializable"],
        }.get(category, ["Verify the cache directory is writable"])
        super().__init__(
            message,
            category=category,
            severity=ErrorSeverity.MEDIUM,
            file_path=file_path,
            suggestions=suggestions,
            context=context,
        )


class CacheCorruptionError(CacheError):
    """Cached content could not be decoded into an entry."""

    def __init__(
        self, message: str, file_path: Path | None = None, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.SERIALIZATION,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            context=context,
        )


class ConfigurationError(CacheError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=[
                "Use a plain profile name without path separators",
                "TTL and size budget must be non-negative integers",
            ],
            context=context,
        )


def classify_error(exception: BaseException) -> ErrorCategory:
    """Classify an exception into an error category."""
    if isinstance(exception, CacheError):
        return exception.category
    if isinstance(exception, PermissionError):
        return ErrorCategory.PERMISSION
    if isinstance(exception, OSError) and exception.errno in _DISK_SPACE_ERRNOS:
        return ErrorCategory.DISK_SPACE
    if isinstance(exception, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
        return ErrorCategory.FILE_ACCESS
    if isinstance(exception, (ValueError, TypeError, KeyError, UnicodeError)):
        return ErrorCategory.SERIALIZATION
    if isinstance(exception, OSError):
        return ErrorCategory.FILE_ACCESS
    return ErrorCategory.UNKNOWN


def handle_file_error(
    file_path: Path,
    operation: str,
    exception: BaseException,
    logger: Any | None = None,
) -> ErrorInfo:
    """
    Handle a per-file failure with classification and logging.

    Args:
        file_path: Path to the file that caused the error
        operation: Operation being performed (e.g., "read", "delete", "evict")
        exception: The exception that occurred
        logger: Optional logger to log the error

    Returns:
        ErrorInfo describing the failure
    """
    category = classify_error(exception)
    severity = ErrorSeverity.LOW if category == ErrorCategory.FILE_ACCESS else ErrorSeverity.MEDIUM

    info = ErrorInfo(
        category=category,
        severity=severity,
        message=f"Cannot {operation} {file_path}: {exception}",
        file_path=file_path,
        operation=operation,
        exception_type=type(exception).__name__,
    )

    if logger:
        logger.log_file_error(str(file_path), str(exception), operation=operation)

    return info
