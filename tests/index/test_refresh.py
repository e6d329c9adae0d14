"""Tests for index/refresh.py module.

Covers:
- expiry-driven skipping
- sync before index, local repositories never synced
- per-repository failure isolation, including config write failures
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from snip.config.store import ConfigStore, Repository
from snip.git.errors import RemoteError
from snip.index.cache import CacheStore
from snip.index.refresh import refresh_repositories
from snip.index.walker import Indexer

NOW = datetime(2026, 3, 1, 12, tzinfo=UTC)
STALE = NOW - timedelta(days=1)


class RecordingSync:
    """Stands in for GitSync; records calls and fails for chosen aliases."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.calls: list[str] = []
        self._failing = failing or set()

    def update(self, repo: Repository) -> None:
        self.calls.append(repo.alias)
        if repo.alias in self._failing:
            raise RemoteError(repo.url, "pull failed")


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "home" / "config.yaml")


@pytest.fixture
def cache(tmp_path: Path) -> CacheStore:
    return CacheStore(tmp_path / "home" / "cache")


@pytest.fixture
def two_repos(
    tmp_path: Path,
    content_repo: Path,
    store: ConfigStore,
    make_repository: Callable[..., Repository],
) -> list[Repository]:
    second = tmp_path / "second"
    shutil.copytree(content_repo, second)
    repos = [
        make_repository(
            "alpha", content_repo, url="https://example.com/alpha.git", last_updated=STALE
        ),
        make_repository(
            "beta", second, url="https://example.com/beta.git", last_updated=STALE
        ),
    ]
    for repo in repos:
        store.add(repo)
    return repos


class TestRefreshRepositories:
    """Refresh orchestration."""

    def test_given_stale_repos_when_refresh_then_indexed_saved_and_touched(
        self, two_repos: list[Repository], store: ConfigStore, cache: CacheStore
    ) -> None:
        # When
        report = refresh_repositories(
            two_repos, store=store, indexer=Indexer(), cache=cache, now=NOW
        )

        # Then
        assert report.ok
        assert report.refreshed == {"alpha": 4, "beta": 4}
        assert report.total_items == 8
        assert cache.load("alpha") is not None
        assert store.require("alpha").last_updated > STALE

    def test_given_fresh_repo_when_refresh_only_expired_then_skipped(
        self, two_repos: list[Repository], store: ConfigStore, cache: CacheStore
    ) -> None:
        """Fresh repositories are left alone unless forced."""
        # Given
        store.touch("alpha", now=NOW)
        repos = store.repositories()

        # When
        report = refresh_repositories(repos, store=store, indexer=Indexer(), cache=cache, now=NOW)
        forced = refresh_repositories(
            repos, store=store, indexer=Indexer(), cache=cache, only_expired=False, now=NOW
        )

        # Then
        assert report.skipped == ["alpha"]
        assert list(report.refreshed) == ["beta"]
        assert set(forced.refreshed) == {"alpha", "beta"}

    def test_given_failing_repo_when_refresh_then_others_still_refreshed(
        self, two_repos: list[Repository], store: ConfigStore, cache: CacheStore
    ) -> None:
        """One repository failing does not stop the rest."""
        # Given
        sync = RecordingSync(failing={"alpha"})

        # When
        report = refresh_repositories(
            two_repos, store=store, indexer=Indexer(), cache=cache, sync=sync, now=NOW
        )

        # Then
        assert sync.calls == ["alpha", "beta"]
        assert not report.ok
        assert "pull failed" in report.failures["alpha"]
        assert report.refreshed == {"beta": 4}
        assert cache.load("alpha") is None
        assert cache.load("beta") is not None
        assert store.require("alpha").last_updated == STALE

    def test_given_missing_path_when_refresh_then_failure_recorded_and_old_cache_kept(
        self,
        two_repos: list[Repository],
        store: ConfigStore,
        cache: CacheStore,
        make_repository: Callable[..., Repository],
        tmp_path: Path,
    ) -> None:
        """A stale cache survives a failed re-index."""
        # Given
        ghost = make_repository("ghost", tmp_path / "gone", last_updated=STALE)
        store.add(ghost)
        cache.save("ghost", [])

        # When
        report = refresh_repositories(
            [ghost, *two_repos], store=store, indexer=Indexer(), cache=cache, now=NOW
        )

        # Then
        assert "ghost" in report.failures
        assert cache.load("ghost") == []
        assert set(report.refreshed) == {"alpha", "beta"}

    def test_given_local_repo_when_refresh_with_sync_then_not_synced(
        self,
        content_repo: Path,
        store: ConfigStore,
        cache: CacheStore,
        make_repository: Callable[..., Repository],
    ) -> None:
        """Repositories without a URL are only re-indexed."""
        # Given
        local = make_repository("local", content_repo, last_updated=STALE)
        store.add(local)
        sync = RecordingSync()

        # When
        report = refresh_repositories(
            [local], store=store, indexer=Indexer(), cache=cache, sync=sync, now=NOW
        )

        # Then
        assert sync.calls == []
        assert report.refreshed == {"local": 4}

    def test_given_on_start_when_refresh_then_called_per_refreshed_repo(
        self, two_repos: list[Repository], store: ConfigStore, cache: CacheStore
    ) -> None:
        started: list[str] = []

        refresh_repositories(
            two_repos,
            store=store,
            indexer=Indexer(),
            cache=cache,
            now=NOW,
            on_start=lambda repo: started.append(repo.alias),
        )

        assert started == ["alpha", "beta"]

    def test_given_config_write_failure_when_refresh_then_other_repos_refreshed(
        self, two_repos: list[Repository], store: ConfigStore, cache: CacheStore
    ) -> None:
        """A failed timestamp write is recorded for that repository only."""
        # Given
        real_named_temporary_file = tempfile.NamedTemporaryFile
        fail_once = iter([True])

        def flaky(*args: Any, **kwargs: Any) -> Any:
            if kwargs.get("dir") == store.path.parent and next(fail_once, False):
                raise PermissionError(13, "Permission denied")
            return real_named_temporary_file(*args, **kwargs)

        # When
        with patch.object(tempfile, "NamedTemporaryFile", side_effect=flaky):
            report = refresh_repositories(
                two_repos, store=store, indexer=Indexer(), cache=cache, now=NOW
            )

        # Then
        assert "Failed to write config" in report.failures["alpha"]
        assert report.refreshed == {"beta": 4}
        reopened = ConfigStore(store.path)
        assert reopened.require("alpha").last_updated == STALE
        assert reopened.require("beta").last_updated > STALE
