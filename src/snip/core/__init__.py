"""Core module exports."""

from snip.core.errors import (
    CacheReadError,
    CacheWriteError,
    ConfigError,
    DeliveryError,
    ErrorCode,
    IndexingError,
    PathError,
    SnipError,
)
from snip.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from snip.core.progress import pluralize, spinner, status, task

__all__ = [
    # Errors
    "CacheReadError",
    "CacheWriteError",
    "ConfigError",
    "DeliveryError",
    "ErrorCode",
    "IndexingError",
    "PathError",
    "SnipError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "pluralize",
    "spinner",
    "status",
    "task",
]
