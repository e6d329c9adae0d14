"""Clone and update content repositories with the git executable.

Credentials are whatever the user's git is configured with (credential
helpers, SSH agent). Interactive prompts are disabled so a missing
credential fails fast instead of hanging the CLI.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from snip.core.logging import get_logger
from snip.git.errors import (
    AuthenticationError,
    GitError,
    GitUnavailableError,
    NotARepositoryError,
    RemoteError,
    SyncError,
)

if TYPE_CHECKING:
    from snip.config.store import Repository

log = get_logger("git.sync")

_AUTH_MARKERS = (
    "authentication failed",
    "could not read username",
    "could not read password",
    "permission denied (publickey)",
    "terminal prompts disabled",
)


def _git_env() -> dict[str, str]:
    env = dict(os.environ)
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


class GitSync:
    """Thin wrapper around `git clone` / `git pull --ff-only`."""

    def __init__(
        self, git: str = "git", timeout_sec: float = 300.0, clone_root: Path | None = None
    ) -> None:
        self._git = git
        self._timeout = timeout_sec
        self._clone_root = clone_root

    def _run(
        self, args: list[str], *, op: str, remote: str, cwd: Path | None = None
    ) -> subprocess.CompletedProcess[str]:
        cmd = [self._git, *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=_git_env(),
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitUnavailableError(str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise RemoteError(remote, f"{op} timed out after {self._timeout:.0f}s") from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            lowered = stderr.lower()
            log.debug("git_failed", op=op, returncode=result.returncode, stderr=stderr)
            if any(marker in lowered for marker in _AUTH_MARKERS):
                raise AuthenticationError(remote, op)
            if "not a git repository" in lowered:
                raise NotARepositoryError(str(cwd) if cwd else remote)
            if "not possible to fast-forward" in lowered or "diverging branches" in lowered:
                raise SyncError(str(cwd), stderr.splitlines()[-1] if stderr else op)
            raise RemoteError(remote, f"{op} failed: {stderr or result.returncode}")
        return result

    def is_valid_remote(self, url: str) -> bool:
        """True if `git ls-remote` can reach url."""
        try:
            self._run(["ls-remote", url], op="ls-remote", remote=url)
        except GitError as e:
            log.debug("remote_invalid", url=url, error=str(e))
            return False
        return True

    def clone(self, url: str, target: Path) -> None:
        """Shallow-clone url into target, replacing anything already there.

        With a clone_root, target must resolve strictly inside it; nothing is
        removed otherwise.
        """
        self._check_clone_target(target)
        try:
            if target.exists():
                shutil.rmtree(target)
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GitError(f"Cannot prepare clone target {target}: {e}") from e
        self._run(["clone", "--depth", "1", url, str(target)], op="clone", remote=url)
        log.info("repository_cloned", url=url, path=str(target))

    def _check_clone_target(self, target: Path) -> None:
        if self._clone_root is None:
            return
        root = self._clone_root.resolve()
        if root not in target.resolve().parents:
            raise GitError(f"Refusing to clone into {target}: outside {self._clone_root}")

    def update(self, repo: Repository) -> None:
        """Fast-forward repo.local_path to its upstream. Up to date is a no-op."""
        path = Path(repo.local_path)
        if not (path / ".git").exists():
            raise NotARepositoryError(str(path))
        self._run(
            ["pull", "--ff-only", "--quiet"],
            op="pull",
            remote=repo.url or "origin",
            cwd=path,
        )
        log.debug("repository_updated", alias=repo.alias)

    def revision(self, path: Path) -> str | None:
        """Short HEAD hash of a checkout, or None if it has none."""
        try:
            result = self._run(
                ["rev-parse", "--short", "HEAD"], op="rev-parse", remote="HEAD", cwd=path
            )
        except GitError:
            return None
        return result.stdout.strip() or None
