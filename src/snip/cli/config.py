"""snip config commands - inspect and edit repository configuration."""

from __future__ import annotations

import shutil

import click
import questionary
from rich.console import Console

from snip.cli.utils import AppContext, cli_errors, load_context
from snip.core.progress import status
from snip.index import available_scopes

_CLEAR = "__clear__"


def _is_managed_clone(ctx: AppContext, alias: str) -> bool:
    repo = ctx.store.get(alias)
    if repo is None or not repo.url:
        return False
    return repo.local_path.parent.resolve() == ctx.store.repos_dir.resolve()


@click.group()
def config_command() -> None:
    """Manage repositories, the default scope and cache expiry."""


@config_command.command("show")
def show_command() -> None:
    """Print configured repositories and settings."""
    ctx = load_context()
    console = Console()
    repositories = ctx.store.repositories()
    default_path = ctx.store.default_path

    console.print("[cyan]Repository Configuration[/cyan]")
    if not repositories:
        console.print("[yellow]No repositories configured.[/yellow]")
    for index, repo in enumerate(repositories, start=1):
        is_default = bool(default_path) and default_path.split("/", 1)[0] == repo.alias
        flag = " [green](default)[/green]" if is_default else ""
        console.print(f"{index}. [cyan]{repo.alias}[/cyan]{flag}")
        console.print(f"   [dim]{repo.url or repo.local_path}[/dim]")
        console.print(f"   [dim]Last updated: {repo.last_updated.isoformat()}[/dim]")

    console.print()
    console.print(f"Default path: [cyan]{default_path or '-'}[/cyan]")
    console.print(f"Cache expiry: {ctx.store.cache_expiry:g}h")
    console.print(f"Home: {ctx.config.storage.home}")


@config_command.command("default")
@click.argument("path", required=False)
@click.option("--clear", "clear_default", is_flag=True, help="Remove the default path")
def default_command(path: str | None, clear_default: bool) -> None:
    """Set the scope used when --scope is not given.

    PATH is an alias or alias/scope. Prompts with known scopes when omitted.
    """
    ctx = load_context()
    if clear_default:
        ctx.store.clear_default_path()
        status("Cleared default path", style="success")
        return

    if path is None:
        repositories = ctx.store.repositories()
        if not repositories:
            raise click.ClickException("No repositories configured.")
        scopes = available_scopes(repositories, ctx.cache.load_all(repositories))
        choices = [questionary.Choice(s, value=s) for s in scopes]
        choices.append(questionary.Choice("Clear default", value=_CLEAR))
        path = questionary.select("Select default path:", choices=choices).ask()
        if path is None:
            status("Cancelled", style="info")
            return
        if path == _CLEAR:
            ctx.store.clear_default_path()
            status("Cleared default path", style="success")
            return

    if not ctx.store.set_default_path(path):
        raise click.ClickException(f"Repository '{path.split('/', 1)[0]}' not found")
    status(f"Set default path to {path}", style="success")


@config_command.command("expiry")
@click.argument("hours", type=float)
def expiry_command(hours: float) -> None:
    """Set how many HOURS a cache stays fresh before search re-indexes it."""
    ctx = load_context()
    with cli_errors():
        ctx.store.set_cache_expiry(hours)
    status(f"Cache expiry set to {hours:g}h", style="success")


@config_command.command("remove")
@click.argument("alias")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
def remove_command(alias: str, yes: bool) -> None:
    """Unregister a repository and delete its cache.

    Clones managed by snip are deleted too; directories added with
    'snip add-local' are left on disk.
    """
    ctx = load_context()
    with cli_errors():
        repo = ctx.store.require(alias)

    if not yes:
        confirmed = questionary.confirm(
            f"Are you sure you want to remove '{alias}'?", default=False
        ).ask()
        if not confirmed:
            status("Cancelled", style="info")
            return

    delete_clone = _is_managed_clone(ctx, alias)
    ctx.store.remove(alias)
    with cli_errors():
        ctx.cache.clear(alias)

    if delete_clone and repo.local_path.exists():
        try:
            shutil.rmtree(repo.local_path)
        except OSError as e:
            status(f"Repository removed, but failed to delete {repo.local_path}: {e}", style="warning")
            return
    status(f"Removed repository '{alias}'", style="success")
