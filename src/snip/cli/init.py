"""snip init / add-local commands - register content repositories."""

from __future__ import annotations

from pathlib import Path

import click
import questionary

from snip.cli.utils import AppContext, alias_from_url, cli_errors, load_context
from snip.config import Repository, check_alias
from snip.core.progress import get_console, pluralize, spinner, status, task


def _register(
    ctx: AppContext, repo: Repository, default_scope: str | None
) -> int:
    """Index repo, save its cache, record it and optionally make it the default."""
    with task(f"Indexing {repo.alias}"):
        items = ctx.indexer.index(repo)
        ctx.cache.save(repo.alias, items)
    ctx.store.add(repo)

    if default_scope is not None:
        default_path = f"{repo.alias}/{default_scope}" if default_scope else repo.alias
        ctx.store.set_default_path(default_path)
    return len(items)


def _report(alias: str, count: int, default_scope: str | None) -> None:
    status(f"Alias: {alias}", style="success")
    if default_scope is not None:
        status("Set as default repository", style="success")
        if default_scope:
            status(f"Default scope: {default_scope}", style="success")
    status(f"Indexed {pluralize(count, 'artifact')}", style="success")


def _ask(message: str, default: str = "") -> str:
    answer = questionary.text(
        message,
        default=default,
        validate=lambda value: bool(value.strip()) or "A value is required",
    ).ask()
    if answer is None:
        raise click.Abort()
    return str(answer).strip()


@click.command()
@click.argument("url", required=False)
@click.option("--alias", "-a", help="Alias for the repository (default: from URL)")
@click.option(
    "--default",
    "-d",
    "default_scope",
    is_flag=False,
    flag_value="",
    default=None,
    help="Make this the default repository, optionally narrowed to SCOPE",
)
def init_command(url: str | None, alias: str | None, default_scope: str | None) -> None:
    """Clone a snippet repository and index it.

    URL is the git remote. Prompts for it when omitted.
    """
    if not url:
        url = _ask("Git repository URL:")
        alias = alias or _ask("Alias for the repository:", default=alias_from_url(url))
    alias = alias or alias_from_url(url)
    with cli_errors():
        check_alias(alias)

    ctx = load_context()
    console = get_console()
    if ctx.store.get(alias) is not None:
        status(f"Repository '{alias}' already exists. Updating...", style="warning")

    with cli_errors():
        with spinner("Validating repository"):
            valid = ctx.sync.is_valid_remote(url)
        if not valid:
            raise click.ClickException(f"Invalid repository URL: {url}")

        local_path = ctx.store.repos_dir / alias
        with spinner("Cloning repository"):
            ctx.sync.clone(url, local_path)

        repo = Repository(alias=alias, url=url, local_path=local_path)
        count = _register(ctx, repo, default_scope)

    console.print()
    status(f"Repository: {url}", style="success")
    _report(alias, count, default_scope)


@click.command()
@click.argument(
    "path", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--alias", "-a", help="Alias for the repository (default: directory name)")
@click.option(
    "--default",
    "-d",
    "default_scope",
    is_flag=False,
    flag_value="",
    default=None,
    help="Make this the default repository, optionally narrowed to SCOPE",
)
def add_local_command(path: Path, alias: str | None, default_scope: str | None) -> None:
    """Register a directory that is already on disk and index it.

    The directory is never cloned or pulled; refresh only re-indexes it.
    """
    local_path = path.expanduser().resolve()
    alias = alias or local_path.name

    ctx = load_context()
    with cli_errors():
        check_alias(alias)
        repo = Repository(alias=alias, local_path=local_path)
        count = _register(ctx, repo, default_scope)

    status(f"Path: {local_path}", style="success")
    _report(alias, count, default_scope)
