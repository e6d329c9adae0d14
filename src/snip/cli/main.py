"""snip CLI - snip command."""

import click

from snip import __version__
from snip.cli.clear import clear_command
from snip.cli.config import config_command
from snip.cli.init import add_local_command, init_command
from snip.cli.pull import pull_command
from snip.cli.refresh import refresh_command
from snip.cli.scopes import scopes_command
from snip.cli.search import search_command
from snip.cli.status import status_command
from snip.config import load_config
from snip.core.errors import SnipError
from snip.core.logging import configure_logging, set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="snip")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """snip - search and pull code snippets from git repositories."""
    try:
        logging_config = load_config().logging
    except SnipError as e:
        raise click.ClickException(e.message) from e
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    set_run_id()


cli.add_command(init_command, name="init")
cli.add_command(add_local_command, name="add-local")
cli.add_command(refresh_command, name="refresh")
cli.add_command(search_command, name="search")
cli.add_command(pull_command, name="pull")
cli.add_command(scopes_command, name="scopes")
cli.add_command(config_command, name="config")
cli.add_command(clear_command, name="clear")
cli.add_command(status_command, name="status")


if __name__ == "__main__":
    cli()
