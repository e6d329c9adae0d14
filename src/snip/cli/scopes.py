"""snip scopes command - list values accepted by --scope."""

import click

from snip.cli.utils import load_context
from snip.index import available_scopes


@click.command()
def scopes_command() -> None:
    """List repository aliases and alias/scope pairs from the caches.

    Does not refresh; run 'snip refresh' first for up-to-date scopes.
    """
    ctx = load_context()
    repositories = ctx.store.repositories()
    for scope in available_scopes(repositories, ctx.cache.load_all(repositories)):
        click.echo(scope)
