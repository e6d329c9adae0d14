"""Config module exports."""

from snip.config.loader import load_config
from snip.config.models import (
    IndexerConfig,
    LoggingConfig,
    SearchConfig,
    SnipConfig,
    StorageConfig,
)
from snip.config.store import ConfigStore, Repository, SnipState, check_alias

__all__ = [
    "check_alias",
    "load_config",
    "ConfigStore",
    "IndexerConfig",
    "LoggingConfig",
    "Repository",
    "SearchConfig",
    "SnipConfig",
    "SnipState",
    "StorageConfig",
]
