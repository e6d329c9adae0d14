"""snip error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index
- 4xxx: Cache
- 5xxx: Delivery
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_UNKNOWN_REPOSITORY = 2003
    CONFIG_WRITE_FAILED = 2004

    # Index (3xxx)
    INDEX_PATH_MISSING = 3001
    INDEX_TRAVERSAL_FAILED = 3002

    # Cache (4xxx)
    CACHE_UNREADABLE = 4001
    CACHE_WRITE_FAILED = 4002
    CACHE_CLEAR_FAILED = 4003

    # Delivery (5xxx)
    DELIVERY_COPY_FAILED = 5001
    DELIVERY_READ_FAILED = 5002
    DELIVERY_NO_FILES = 5003


@dataclass(frozen=True, slots=True)
class SnipError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CACHE_WRITE_FAILED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SnipError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_WRITE_FAILED,
            message=f"Failed to write config at {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )

    @classmethod
    def unknown_repository(cls, alias: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_UNKNOWN_REPOSITORY,
            message=f"Repository '{alias}' not found",
            details={"alias": alias},
        )


class PathError(SnipError):
    """A repository's local path does not exist."""

    @classmethod
    def missing(cls, path: str) -> "PathError":
        return cls(
            code=ErrorCode.INDEX_PATH_MISSING,
            message=f"Repository path does not exist: {path}",
            details={"path": path},
        )


class IndexingError(SnipError):
    """Traversal failed while indexing a repository. Raised from the cause."""

    @classmethod
    def failed(cls, alias: str, reason: str) -> "IndexingError":
        return cls(
            code=ErrorCode.INDEX_TRAVERSAL_FAILED,
            message=f"Failed to index repository {alias}: {reason}",
            details={"alias": alias, "reason": reason},
        )


class CacheReadError(SnipError):
    """Cache content could not be read. Never surfaced; callers see "no cache"."""

    @classmethod
    def unreadable(cls, alias: str, reason: str) -> "CacheReadError":
        return cls(
            code=ErrorCode.CACHE_UNREADABLE,
            message=f"Cache for {alias} is unreadable: {reason}",
            details={"alias": alias, "reason": reason},
        )


class CacheWriteError(SnipError):
    """I/O failure while saving or clearing a cache."""

    @classmethod
    def write_failed(cls, alias: str, reason: str) -> "CacheWriteError":
        return cls(
            code=ErrorCode.CACHE_WRITE_FAILED,
            message=f"Failed to save cache for {alias}: {reason}",
            retryable=True,
            details={"alias": alias, "reason": reason},
        )

    @classmethod
    def clear_failed(cls, target: str, reason: str) -> "CacheWriteError":
        return cls(
            code=ErrorCode.CACHE_CLEAR_FAILED,
            message=f"Failed to clear cache {target}: {reason}",
            details={"target": target, "reason": reason},
        )


class DeliveryError(SnipError):
    """Failure copying or reading an artifact for the user."""

    @classmethod
    def copy_failed(cls, name: str, target: str, reason: str) -> "DeliveryError":
        return cls(
            code=ErrorCode.DELIVERY_COPY_FAILED,
            message=f"Failed to copy {name} to {target}: {reason}",
            details={"name": name, "target": target, "reason": reason},
        )

    @classmethod
    def read_failed(cls, name: str, reason: str) -> "DeliveryError":
        return cls(
            code=ErrorCode.DELIVERY_READ_FAILED,
            message=f"Failed to read {name}: {reason}",
            details={"name": name, "reason": reason},
        )

    @classmethod
    def no_files(cls, name: str) -> "DeliveryError":
        return cls(
            code=ErrorCode.DELIVERY_NO_FILES,
            message=f"No code files found in {name}",
            details={"name": name},
        )
