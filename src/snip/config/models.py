"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SNIP__SECTION__KEY)
3. Global YAML (~/.config/snip/settings.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    SNIP__<SECTION>__<KEY>=<VALUE>

Examples:
    SNIP__LOGGING__LEVEL=DEBUG
    SNIP__STORAGE__HOME=/tmp/snip-home
    SNIP__SEARCH__THRESHOLD=0.4
    SNIP__INDEXER__MAX_WORKERS=1

The repository list, default scope and cache expiry live in the
configuration store (see store.py), not here.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from snip.config.constants import DEFAULT_MIN_SCORE, SEARCH_MAX_RESULTS

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SNIP__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. User-facing output does not go through logging.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class StorageConfig(BaseModel):
    """Where snip keeps its state.

    Env vars:
        SNIP__STORAGE__HOME: Root directory for config, caches and clones
    """

    home: Path = Field(
        default_factory=lambda: Path("~/.snip").expanduser(),
        description="Root directory. Holds config.yaml, cache/ and repos/.",
    )

    @field_validator("home")
    @classmethod
    def expand_home(cls, v: Path) -> Path:
        return Path(v).expanduser()

    @property
    def config_file(self) -> Path:
        return self.home / "config.yaml"

    @property
    def cache_dir(self) -> Path:
        return self.home / "cache"

    @property
    def repos_dir(self) -> Path:
        return self.home / "repos"


class SearchConfig(BaseModel):
    """Search ranking configuration.

    Env vars:
        SNIP__SEARCH__THRESHOLD: Minimum score (exclusive) for a result
        SNIP__SEARCH__MAX_RESULTS: Default number of results shown
    """

    threshold: float = Field(
        default=DEFAULT_MIN_SCORE,
        description="Results scoring at or below this are dropped. "
        "TRADEOFF: Lower values surface scattered matches.",
    )
    max_results: int = Field(
        default=20,
        description="Default number of results displayed.",
    )

    @field_validator("threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not (0.0 <= v < 1.0):
            raise ValueError(f"Threshold must be in [0, 1), got {v}")
        return v

    @field_validator("max_results")
    @classmethod
    def validate_max_results(cls, v: int) -> int:
        if not (1 <= v <= SEARCH_MAX_RESULTS):
            raise ValueError(f"max_results must be 1-{SEARCH_MAX_RESULTS}, got {v}")
        return v


class IndexerConfig(BaseModel):
    """Repository walker configuration.

    Env vars:
        SNIP__INDEXER__MAX_WORKERS: Threads used to walk scope directories
    """

    max_workers: int = Field(
        default=4,
        description="Scope directories walked in parallel. 1 walks sequentially.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class SnipConfig(BaseModel):
    """Root configuration for snip."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    indexer: IndexerConfig = Field(default_factory=IndexerConfig)
