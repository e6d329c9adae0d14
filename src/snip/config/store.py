"""Configuration store: registered repositories, default scope, cache expiry.

Stored in <home>/config.yaml. snip rewrites the whole file on every change;
hand edits are allowed but comments are not preserved.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from snip.config.constants import DEFAULT_CACHE_EXPIRY_HOURS
from snip.core.errors import ConfigError
from snip.core.logging import get_logger

log = get_logger("config.store")


def _utcnow() -> datetime:
    return datetime.now(UTC)


_ALIAS_FORBIDDEN = ("/", "\\", ":")


def alias_problem(alias: str) -> str | None:
    """Why alias cannot name a clone directory and cache file, or None if it can."""
    if not alias.strip():
        return "must not be empty"
    if alias in (".", ".."):
        return "must not be '.' or '..'"
    for char in _ALIAS_FORBIDDEN:
        if char in alias:
            return f"must not contain {char!r}"
    return None


def check_alias(alias: str) -> str:
    """Return alias unchanged, or raise ConfigError.invalid_value."""
    problem = alias_problem(alias)
    if problem is not None:
        raise ConfigError.invalid_value("alias", alias, problem)
    return alias


class Repository(BaseModel):
    """A registered content repository."""

    alias: str = Field(min_length=1)
    url: str = ""
    local_path: Path
    last_updated: datetime = Field(default_factory=_utcnow)

    @field_validator("alias")
    @classmethod
    def validate_alias(cls, v: str) -> str:
        problem = alias_problem(v)
        if problem is not None:
            raise ValueError(f"alias {problem}")
        return v

    @field_validator("last_updated")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=UTC)


class SnipState(BaseModel):
    """Everything the configuration store persists."""

    cache_expiry: float = Field(
        default=DEFAULT_CACHE_EXPIRY_HOURS,
        description="Hours before a repository's cache is re-indexed.",
    )
    default_path: str | None = Field(
        default=None,
        description='Default search scope: "alias" or "alias/scope".',
    )
    repositories: list[Repository] = Field(default_factory=list)

    @field_validator("cache_expiry")
    @classmethod
    def validate_expiry(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"cache_expiry must be > 0 hours, got {v}")
        return v


STATE_HEADER = """\
# snip configuration - managed by 'snip init' and 'snip config'.
# Comments in this file are not preserved.

"""


def _alias_of(path: str) -> str:
    return path.split("/", 1)[0]


class ConfigStore:
    """Read/write access to the persisted SnipState, keyed by repository alias."""

    def __init__(self, path: Path, repos_dir: Path | None = None) -> None:
        self._path = path
        self._repos_dir = repos_dir or path.parent / "repos"
        self._state = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def repos_dir(self) -> Path:
        """Directory where cloned repositories live."""
        return self._repos_dir

    @property
    def state(self) -> SnipState:
        return self._state.model_copy(deep=True)

    # =========================================================================
    # Repositories
    # =========================================================================

    def repositories(self) -> list[Repository]:
        return [repo.model_copy() for repo in self._state.repositories]

    def get(self, alias: str) -> Repository | None:
        for repo in self._state.repositories:
            if repo.alias == alias:
                return repo.model_copy()
        return None

    def require(self, alias: str) -> Repository:
        repo = self.get(alias)
        if repo is None:
            raise ConfigError.unknown_repository(alias)
        return repo

    def add(self, repo: Repository) -> None:
        """Register a repository, replacing one with the same alias or URL."""
        repos = self._state.repositories
        for i, existing in enumerate(repos):
            if existing.alias == repo.alias or (repo.url and existing.url == repo.url):
                repos[i] = repo
                break
        else:
            repos.append(repo)
        self._save()
        log.debug("repository_added", alias=repo.alias)

    def remove(self, alias: str) -> bool:
        """Unregister a repository. Clears the default path if it pointed at it."""
        before = len(self._state.repositories)
        self._state.repositories = [r for r in self._state.repositories if r.alias != alias]
        if len(self._state.repositories) == before:
            return False
        if self._state.default_path and _alias_of(self._state.default_path) == alias:
            self._state.default_path = None
        self._save()
        log.debug("repository_removed", alias=alias)
        return True

    def touch(self, alias: str, now: datetime | None = None) -> None:
        """Reset a repository's last-updated timestamp after a re-index.

        The in-memory state only changes once the file write succeeded.
        """
        for i, repo in enumerate(self._state.repositories):
            if repo.alias == alias:
                state = self._state.model_copy(deep=True)
                state.repositories[i].last_updated = now or _utcnow()
                self._write(state)
                self._state = state
                return

    def is_expired(self, repo: Repository, now: datetime | None = None) -> bool:
        age = (now or _utcnow()) - repo.last_updated
        return age > timedelta(hours=self._state.cache_expiry)

    # =========================================================================
    # Default path / expiry
    # =========================================================================

    @property
    def default_path(self) -> str | None:
        return self._state.default_path

    def set_default_path(self, path: str) -> bool:
        """Set the default scope. The alias part must name a registered repository."""
        if self.get(_alias_of(path)) is None:
            return False
        self._state.default_path = path
        self._save()
        return True

    def clear_default_path(self) -> None:
        self._state.default_path = None
        self._save()

    @property
    def cache_expiry(self) -> float:
        return self._state.cache_expiry

    def set_cache_expiry(self, hours: float) -> None:
        if hours <= 0:
            raise ConfigError.invalid_value("cache_expiry", hours, "must be greater than 0")
        self._state.cache_expiry = hours
        self._save()

    # =========================================================================
    # Persistence
    # =========================================================================

    def _load(self) -> SnipState:
        if not self._path.exists():
            state = SnipState()
            self._write(state)
            return state
        try:
            with self._path.open() as f:
                data: Any = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError.parse_error(str(self._path), str(e)) from e
        if not isinstance(data, dict):
            raise ConfigError.parse_error(str(self._path), "top level must be a mapping")
        try:
            return SnipState.model_validate(data)
        except ValidationError as e:
            err = e.errors()[0]
            field = ".".join(str(loc) for loc in err["loc"])
            raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    def _save(self) -> None:
        self._write(self._state)

    def _write(self, state: SnipState) -> None:
        """Replace the state file via a temp file in the same directory.

        Raises:
            ConfigError: on any I/O failure; the previous file stays intact.
        """
        data = state.model_dump(mode="json")
        content = STATE_HEADER + yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._repos_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise ConfigError.write_failed(str(self._path), str(e)) from e
