"""snip status command - repository and cache overview."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from snip.cli.utils import load_context


def _fmt(ts: datetime | None) -> str:
    return ts.astimezone().strftime("%Y-%m-%d %H:%M") if ts else "-"


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def status_command(as_json: bool) -> None:
    """Show configured repositories, cache age and item counts."""
    ctx = load_context()
    rows: list[dict[str, Any]] = []
    for repo in ctx.store.repositories():
        items = ctx.cache.load(repo.alias)
        cached_at = ctx.cache.cached_at(repo.alias)
        rows.append(
            {
                "alias": repo.alias,
                "url": repo.url,
                "local_path": str(repo.local_path),
                "present": repo.local_path.is_dir(),
                "last_updated": repo.last_updated.isoformat(),
                "expired": ctx.store.is_expired(repo),
                "cached_at": cached_at.isoformat() if cached_at else None,
                "items": len(items) if items is not None else None,
            }
        )

    if as_json:
        click.echo(
            json.dumps(
                {
                    "home": str(ctx.config.storage.home),
                    "default_path": ctx.store.default_path,
                    "cache_expiry_hours": ctx.store.cache_expiry,
                    "repositories": rows,
                },
                indent=2,
            )
        )
        return

    if not rows:
        click.echo("No repositories configured. Use 'snip init <git-url>' to add one.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Alias", style="cyan")
    table.add_column("Source", style="dim")
    table.add_column("Cached")
    table.add_column("Items", justify="right")
    table.add_column("State")
    for row in rows:
        if not row["present"]:
            state = "[red]missing[/red]"
        elif row["expired"]:
            state = "[yellow]expired[/yellow]"
        else:
            state = "[green]fresh[/green]"
        cached = datetime.fromisoformat(row["cached_at"]) if row["cached_at"] else None
        table.add_row(
            row["alias"],
            row["url"] or row["local_path"],
            _fmt(cached),
            "-" if row["items"] is None else str(row["items"]),
            state,
        )
    console = Console()
    console.print(table)
    console.print(
        f"Default path: {ctx.store.default_path or '-'}  "
        f"Cache expiry: {ctx.store.cache_expiry:g}h"
    )
