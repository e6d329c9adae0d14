"""Allow ``python -m snip``."""

from snip.cli.main import cli

cli()
