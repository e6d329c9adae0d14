"""CLI utilities."""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import click

from snip.config import ConfigStore, SnipConfig, load_config
from snip.core.errors import SnipError
from snip.core.logging import get_logger
from snip.core.progress import status
from snip.git import GitError, GitSync
from snip.index import ArtifactRecord, CacheStore, Indexer, refresh_repositories

_ALIAS_RE = re.compile(r"([^/:]+?)(?:\.git)?/?$")

log = get_logger("cli")


@dataclass
class AppContext:
    """Collaborators shared by every command, built from settings."""

    config: SnipConfig
    store: ConfigStore
    cache: CacheStore
    indexer: Indexer
    sync: GitSync


def load_context() -> AppContext:
    """Resolve settings and open the state under ``storage.home``.

    Raises:
        click.ClickException: If settings or the state file are invalid
    """
    with cli_errors():
        config = load_config()
        storage = config.storage
        store = ConfigStore(storage.config_file, repos_dir=storage.repos_dir)
    return AppContext(
        config=config,
        store=store,
        cache=CacheStore(storage.cache_dir),
        indexer=Indexer(max_workers=config.indexer.max_workers),
        sync=GitSync(clone_root=storage.repos_dir),
    )


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn domain errors into click errors (exit code 1, message on stderr)."""
    try:
        yield
    except SnipError as e:
        log.debug("command_failed", **e.to_dict())
        raise click.ClickException(e.message) from e
    except GitError as e:
        log.debug("command_failed", error=type(e).__name__, message=str(e))
        raise click.ClickException(str(e)) from e


def alias_from_url(url: str) -> str:
    """Last path segment of a remote URL without ``.git``."""
    match = _ALIAS_RE.search(url.strip())
    if match is None or not match.group(1):
        return "snippets"
    return match.group(1)


def load_items(ctx: AppContext, *, refresh: bool = True) -> list[ArtifactRecord]:
    """All cached artifacts, re-indexing expired repositories first.

    Refresh failures are reported as warnings; stale caches stay usable.
    """
    repositories = ctx.store.repositories()
    if refresh:
        report = refresh_repositories(
            repositories,
            store=ctx.store,
            indexer=ctx.indexer,
            cache=ctx.cache,
            sync=ctx.sync,
            on_start=lambda repo: status(f"Refreshing {repo.alias}...", style="info"),
        )
        for alias, error in report.failures.items():
            status(f"Failed to refresh {alias}: {error}", style="warning")
    return ctx.cache.load_all(repositories)


def require_repositories(ctx: AppContext) -> None:
    if not ctx.store.repositories():
        raise click.ClickException(
            "No repositories configured. Use 'snip init <git-url>' to add a repository."
        )
