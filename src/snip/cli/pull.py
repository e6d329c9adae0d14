"""snip pull command - pick an artifact and deliver it."""

from __future__ import annotations

import click
import questionary

from snip.cli.search import run_search
from snip.cli.utils import cli_errors, load_context
from snip.config.constants import PICKER_PAGE_SIZE
from snip.core.progress import pluralize, spinner, status
from snip.files import copy_to_directory, preview, read_contents
from snip.index import ArtifactRecord, ArtifactType, SearchResult

_PRINT = "print"
_DIRECTORY = "directory"

_PICKER_STYLE = questionary.Style(
    [
        ("question", "bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:cyan"),
        ("description", "fg:ansibrightblack"),
    ]
)


def _label(item: ArtifactRecord) -> str:
    label = f"{item.name} ({item.type.value})"
    if item.description:
        label += f": {item.description}"
    return f"{label} - [{item.location}]"


def select_artifact(results: list[SearchResult]) -> ArtifactRecord | None:
    """Interactive picker over the top results. None when cancelled."""
    choices = [
        questionary.Choice(_label(r.item), value=r.item, description=preview(r.item))
        for r in results[:PICKER_PAGE_SIZE]
    ]
    choices.append(questionary.Choice("Cancel", value=None))
    answer = questionary.select(
        "Select an artifact:",
        choices=choices,
        style=_PICKER_STYLE,
    ).ask()
    if answer is None:
        return None
    assert isinstance(answer, ArtifactRecord)
    return answer


def choose_output(item: ArtifactRecord) -> str | None:
    """Ask how to deliver item. Folder artifacts can only go to a directory."""
    if item.type is not ArtifactType.SNIPPET:
        return _DIRECTORY
    answer = questionary.select(
        "How would you like to use this snippet?",
        choices=[
            questionary.Choice("Print to stdout", value=_PRINT),
            questionary.Choice("Pull to directory", value=_DIRECTORY),
        ],
    ).ask()
    if answer is None:
        return None
    return str(answer)


def ask_directory() -> str | None:
    answer = questionary.path(
        "Target directory:",
        default=".",
        only_directories=True,
    ).ask()
    if answer is None:
        return None
    return str(answer).strip() or None


@click.command()
@click.argument("query", required=False)
@click.option("--scope", "-s", help="Repository alias, scope name, or alias/scope")
@click.option("--target", "-t", help="Directory to pull files into")
@click.option("--print", "to_stdout", is_flag=True, help="Write the contents to stdout")
@click.option("--no-refresh", is_flag=True, help="Use cached data even if it is expired")
def pull_command(
    query: str | None,
    scope: str | None,
    target: str | None,
    to_stdout: bool,
    no_refresh: bool,
) -> None:
    """Search, pick one artifact and copy it to a directory or stdout."""
    if target and to_stdout:
        raise click.UsageError("--target and --print are mutually exclusive")

    if query is None:
        query = questionary.text(
            "Search query:",
            validate=lambda value: bool(value.strip()) or "Search query is required",
        ).ask()
        if query is None:
            raise click.Abort()

    ctx = load_context()
    with spinner("Loading artifacts"):
        results = run_search(ctx, query, scope, refresh=not no_refresh)

    if not results:
        status("No artifacts found matching your query.", style="warning")
        return
    status(f"Found {pluralize(len(results), 'match', 'matches')}", style="success")

    item = select_artifact(results)
    if item is None:
        status("Operation cancelled.", style="info")
        return

    if to_stdout:
        output: str | None = _PRINT
    elif target:
        output = _DIRECTORY
    else:
        output = choose_output(item)
    if output is None:
        status("Operation cancelled.", style="info")
        return

    with cli_errors():
        if output == _PRINT:
            click.echo(read_contents(item))
            return
        destination = target or ask_directory()
        if destination is None:
            status("Operation cancelled.", style="info")
            return
        written = copy_to_directory(item, destination)
    status(f"Pulled {item.name} to {written}", style="success")
