"""Test fixtures for git module."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

_IDENTITY = ["-c", "user.name=Test User", "-c", "user.email=test@example.com"]


def git(*args: str, cwd: Path) -> str:
    """Run git with a fixed identity and return stdout."""
    result = subprocess.run(
        ["git", *_IDENTITY, *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(work: Path, rel: str, content: str, message: str) -> None:
    path = work / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    git("add", rel, cwd=work)
    git("commit", "-q", "-m", message, cwd=work)


@pytest.fixture
def remote(tmp_path: Path) -> Path:
    """Bare remote on branch main holding one snippet."""
    bare = tmp_path / "remote.git"
    git("init", "-q", "--bare", str(bare), cwd=tmp_path)
    git("symbolic-ref", "HEAD", "refs/heads/main", cwd=bare)

    work = tmp_path / "seed"
    git("init", "-q", str(work), cwd=tmp_path)
    git("checkout", "-q", "-b", "main", cwd=work)
    commit_file(work, "js/snippet/hooks/useFetch.js", "export {}\n", "Initial commit")
    git("remote", "add", "origin", bare.as_uri(), cwd=work)
    git("push", "-q", "origin", "main", cwd=work)
    return bare


@pytest.fixture
def seed(remote: Path, tmp_path: Path) -> Path:
    """Working copy used to push new commits to the remote."""
    return tmp_path / "seed"
