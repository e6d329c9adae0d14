"""snip clear command - drop cached indexes."""

import click
import questionary

from snip.cli.utils import cli_errors, load_context
from snip.core.progress import get_console, status


@click.command()
@click.argument("alias", required=False)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
def clear_command(alias: str | None, yes: bool) -> None:
    """Remove cached indexes. Repositories stay configured.

    ALIAS limits the clear to one repository. The next search re-indexes
    whatever has no cache.
    """
    ctx = load_context()
    console = get_console()
    if alias is not None:
        with cli_errors():
            ctx.store.require(alias)

    target = f"the cache for '{alias}'" if alias else "all caches"
    if not yes:
        answer = questionary.select(
            f"Clear {target}?",
            choices=[
                questionary.Choice("No, keep the cache", value=False),
                questionary.Choice("Yes, clear it", value=True),
            ],
            style=questionary.Style(
                [
                    ("question", "bold"),
                    ("highlighted", "fg:red bold"),
                    ("selected", "fg:red"),
                ]
            ),
        ).ask()

        if not answer:
            console.print("[dim]Cancelled[/dim]")
            return

    with cli_errors():
        ctx.cache.clear(alias)
    status(f"Cleared {target}", style="success")
