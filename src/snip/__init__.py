"""snip - search and pull code snippets from git repositories."""

__version__ = "0.1.0"
