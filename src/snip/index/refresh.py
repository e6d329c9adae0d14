"""Refresh orchestration: re-sync and re-index stale repositories.

A failure on one repository is logged and recorded; the others still
refresh, and the failed repository keeps whatever cache it already had.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from snip.core.errors import SnipError
from snip.core.logging import get_logger
from snip.git.errors import GitError

if TYPE_CHECKING:
    from snip.config.store import ConfigStore, Repository
    from snip.index.cache import CacheStore
    from snip.index.walker import Indexer

log = get_logger("index.refresh")


class RepositorySync(Protocol):
    """Brings repository.local_path up to date before indexing."""

    def update(self, repo: Repository) -> None: ...


@dataclass
class RefreshReport:
    """Outcome of one refresh pass."""

    refreshed: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def total_items(self) -> int:
        return sum(self.refreshed.values())

    @property
    def ok(self) -> bool:
        return not self.failures


def refresh_repository(
    repo: Repository,
    *,
    store: ConfigStore,
    indexer: Indexer,
    cache: CacheStore,
    sync: RepositorySync | None = None,
) -> int:
    """Sync, index, save and touch one repository. Returns the item count.

    Repositories without a URL are local and are never synced. Errors
    propagate; use refresh_repositories for isolation.
    """
    if sync is not None and repo.url:
        sync.update(repo)
    items = indexer.index(repo)
    cache.save(repo.alias, items)
    store.touch(repo.alias)
    return len(items)


def refresh_repositories(
    repositories: Iterable[Repository],
    *,
    store: ConfigStore,
    indexer: Indexer,
    cache: CacheStore,
    sync: RepositorySync | None = None,
    only_expired: bool = True,
    now: datetime | None = None,
    on_start: Callable[[Repository], None] | None = None,
) -> RefreshReport:
    """Refresh repositories in order, isolating per-repository failures."""
    report = RefreshReport()
    for repo in repositories:
        if only_expired and not store.is_expired(repo, now):
            report.skipped.append(repo.alias)
            continue

        if on_start is not None:
            on_start(repo)
        try:
            count = refresh_repository(repo, store=store, indexer=indexer, cache=cache, sync=sync)
        except (SnipError, GitError) as e:
            report.failures[repo.alias] = str(e)
            log.warning("refresh_failed", alias=repo.alias, error=str(e))
            continue

        report.refreshed[repo.alias] = count
        log.info("refresh_done", alias=repo.alias, items=count)
    return report
