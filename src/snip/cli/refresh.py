"""snip refresh command - re-sync and re-index repositories."""

import click

from snip.cli.utils import cli_errors, load_context, require_repositories
from snip.core.progress import pluralize, spinner, status
from snip.index import refresh_repositories


@click.command()
@click.argument("alias", required=False)
@click.option("--no-sync", is_flag=True, help="Re-index without pulling from the remote")
def refresh_command(alias: str | None, no_sync: bool) -> None:
    """Pull and re-index repositories regardless of cache age.

    ALIAS limits the refresh to one repository.
    """
    ctx = load_context()
    if alias:
        with cli_errors():
            repositories = [ctx.store.require(alias)]
    else:
        require_repositories(ctx)
        repositories = ctx.store.repositories()

    with spinner("Refreshing repositories"):
        report = refresh_repositories(
            repositories,
            store=ctx.store,
            indexer=ctx.indexer,
            cache=ctx.cache,
            sync=None if no_sync else ctx.sync,
            only_expired=False,
        )

    for name, count in report.refreshed.items():
        status(f"{name}: {pluralize(count, 'item')}", style="success")
    for name, error in report.failures.items():
        status(f"{name}: {error}", style="error")

    if not report.refreshed:
        raise click.ClickException("Failed to refresh any repositories")
    status(
        f"Refreshed {pluralize(len(report.refreshed), 'repository', 'repositories')} "
        f"with {pluralize(report.total_items, 'item')}",
        style="none",
    )
