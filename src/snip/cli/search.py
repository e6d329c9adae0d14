"""snip search command - rank cached artifacts against a query."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table

from snip.cli.utils import AppContext, load_context, load_items, require_repositories
from snip.core.progress import status
from snip.index import SearchResult, search


def run_search(
    ctx: AppContext, query: str, scope: str | None, *, refresh: bool
) -> list[SearchResult]:
    """Shared by search and pull: refresh, load caches, rank.

    scope falls back to the configured default path.
    """
    require_repositories(ctx)
    items = load_items(ctx, refresh=refresh)
    if not items:
        raise click.ClickException("No artifacts found. Try refreshing with 'snip refresh'.")
    return search(
        items,
        query,
        scope or ctx.store.default_path,
        threshold=ctx.config.search.threshold,
    )


def _result_dict(result: SearchResult) -> dict[str, object]:
    item = result.item
    return {
        "name": item.name,
        "type": item.type.value,
        "repository": item.repository,
        "scope": item.scope,
        "category": item.category,
        "location": item.location,
        "description": item.description,
        "tags": item.tags,
        "path": str(item.file_path or item.path),
        "score": round(result.score, 4),
    }


@click.command()
@click.argument("query", default="")
@click.option("--scope", "-s", help="Repository alias, scope name, or alias/scope")
@click.option("--limit", "-n", type=click.IntRange(min=1), help="Maximum results to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-refresh", is_flag=True, help="Use cached data even if it is expired")
def search_command(
    query: str, scope: str | None, limit: int | None, as_json: bool, no_refresh: bool
) -> None:
    """Search snippets, boilerplates and modules.

    An empty QUERY lists everything in scope.
    """
    ctx = load_context()
    results = run_search(ctx, query, scope, refresh=not no_refresh)
    shown = results[: limit or ctx.config.search.max_results]

    if as_json:
        click.echo(json.dumps([_result_dict(r) for r in shown], indent=2))
        return

    if not shown:
        status("No artifacts found matching your query.", style="warning")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Location", style="dim")
    table.add_column("Description")
    table.add_column("Score", justify="right")
    for result in shown:
        item = result.item
        table.add_row(
            item.name,
            item.type.value,
            item.location,
            item.description,
            f"{result.score:.2f}",
        )
    Console().print(table)
    if len(results) > len(shown):
        status(f"... and {len(results) - len(shown)} more", style="info")
