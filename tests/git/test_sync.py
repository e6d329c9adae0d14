"""Tests for git/sync.py against real repositories.

Covers:
- remote validity checks
- shallow clone into a fresh or occupied target
- clone targets confined to the clone root
- fast-forward updates, no-op updates and diverged checkouts
- error mapping for non-repositories and a missing git binary
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from snip.config.store import Repository
from snip.git import (
    GitError,
    GitSync,
    GitUnavailableError,
    NotARepositoryError,
    RemoteError,
    SyncError,
)
from tests.git.conftest import commit_file, git

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not found")


@pytest.fixture
def sync() -> GitSync:
    return GitSync(timeout_sec=60)


class TestRemoteCheck:
    """is_valid_remote tests."""

    def test_given_bare_remote_when_checked_then_valid(self, sync: GitSync, remote: Path) -> None:
        assert sync.is_valid_remote(remote.as_uri()) is True

    def test_given_missing_remote_when_checked_then_invalid(
        self, sync: GitSync, tmp_path: Path
    ) -> None:
        assert sync.is_valid_remote((tmp_path / "nope.git").as_uri()) is False


class TestClone:
    """clone tests."""

    def test_given_remote_when_clone_then_files_checked_out(
        self, sync: GitSync, remote: Path, tmp_path: Path
    ) -> None:
        # Given
        target = tmp_path / "home" / "repos" / "work"

        # When
        sync.clone(remote.as_uri(), target)

        # Then
        assert (target / "js/snippet/hooks/useFetch.js").is_file()
        assert sync.revision(target) is not None

    def test_given_occupied_target_when_clone_then_replaced(
        self, sync: GitSync, remote: Path, tmp_path: Path
    ) -> None:
        """Whatever was at the target before is removed."""
        # Given
        target = tmp_path / "work"
        (target / "junk").mkdir(parents=True)
        (target / "junk/file.txt").write_text("old")

        # When
        sync.clone(remote.as_uri(), target)

        # Then
        assert not (target / "junk").exists()
        assert (target / "js").is_dir()

    def test_given_target_outside_clone_root_when_clone_then_nothing_removed(
        self, remote: Path, tmp_path: Path
    ) -> None:
        """A target that escapes the clone root is refused before anything is deleted."""
        # Given
        home = tmp_path / "home"
        (home / "cache").mkdir(parents=True)
        (home / "config.yaml").write_text("repositories: []\n")
        (home / "cache" / "work.json").write_text("{}")
        sync = GitSync(timeout_sec=60, clone_root=home / "repos")

        # When
        for target in (home / "repos" / "..", home / "repos", tmp_path / "elsewhere"):
            with pytest.raises(GitError, match="Refusing to clone"):
                sync.clone(remote.as_uri(), target)

        # Then
        assert (home / "config.yaml").is_file()
        assert (home / "cache" / "work.json").is_file()
        assert not (tmp_path / "elsewhere").exists()

    def test_given_target_inside_clone_root_when_clone_then_cloned(
        self, remote: Path, tmp_path: Path
    ) -> None:
        sync = GitSync(timeout_sec=60, clone_root=tmp_path / "repos")

        sync.clone(remote.as_uri(), tmp_path / "repos" / "work")

        assert (tmp_path / "repos/work/js").is_dir()

    def test_given_missing_remote_when_clone_then_remote_error(
        self, sync: GitSync, tmp_path: Path
    ) -> None:
        with pytest.raises(RemoteError):
            sync.clone((tmp_path / "nope.git").as_uri(), tmp_path / "work")


class TestUpdate:
    """update (fast-forward pull) tests."""

    def _clone(self, sync: GitSync, remote: Path, tmp_path: Path) -> Repository:
        target = tmp_path / "work"
        sync.clone(remote.as_uri(), target)
        return Repository(alias="work", url=remote.as_uri(), local_path=target)

    def test_given_new_upstream_commit_when_update_then_fast_forwarded(
        self, sync: GitSync, remote: Path, seed: Path, tmp_path: Path
    ) -> None:
        # Given
        repo = self._clone(sync, remote, tmp_path)
        commit_file(seed, "js/snippet/hooks/useDebounce.js", "export {}\n", "Add debounce")
        git("push", "-q", "origin", "main", cwd=seed)

        # When
        sync.update(repo)

        # Then
        assert (repo.local_path / "js/snippet/hooks/useDebounce.js").is_file()

    def test_given_up_to_date_when_update_then_no_op(
        self, sync: GitSync, remote: Path, tmp_path: Path
    ) -> None:
        # Given
        repo = self._clone(sync, remote, tmp_path)
        before = sync.revision(repo.local_path)

        # When
        sync.update(repo)

        # Then
        assert sync.revision(repo.local_path) == before

    def test_given_diverged_checkout_when_update_then_sync_error(
        self, sync: GitSync, remote: Path, seed: Path, tmp_path: Path
    ) -> None:
        """Local commits that conflict with upstream history are never merged."""
        # Given
        repo = self._clone(sync, remote, tmp_path)
        commit_file(seed, "upstream.txt", "u\n", "Upstream change")
        git("push", "-q", "origin", "main", cwd=seed)
        commit_file(repo.local_path, "local.txt", "l\n", "Local change")

        # When / Then
        with pytest.raises(SyncError):
            sync.update(repo)

    def test_given_plain_directory_when_update_then_not_a_repository(
        self, sync: GitSync, tmp_path: Path
    ) -> None:
        # Given
        plain = tmp_path / "plain"
        plain.mkdir()
        repo = Repository(alias="plain", url="https://example.com/x.git", local_path=plain)

        # When / Then
        with pytest.raises(NotARepositoryError):
            sync.update(repo)


class TestGitUnavailable:
    """Missing executable."""

    def test_given_missing_binary_when_run_then_unavailable(self, tmp_path: Path) -> None:
        sync = GitSync(git=str(tmp_path / "no-such-git"))

        with pytest.raises(GitUnavailableError):
            sync.clone("https://example.com/x.git", tmp_path / "work")
