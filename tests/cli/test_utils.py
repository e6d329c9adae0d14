"""Tests for CLI utilities.

Covers:
- alias_from_url()
- cli_errors() mapping
- load_context() wiring
"""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from snip.cli.utils import alias_from_url, cli_errors, load_context
from snip.core.errors import ConfigError
from snip.git.errors import RemoteError


class TestAliasFromUrl:
    """Default alias derivation."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://github.com/user/snippets.git", "snippets"),
            ("https://github.com/user/my-snips", "my-snips"),
            ("https://github.com/user/my-snips/", "my-snips"),
            ("git@github.com:user/work.git", "work"),
            ("file:///srv/git/team.git", "team"),
            ("", "snippets"),
        ],
    )
    def test_alias_from_url(self, url: str, expected: str) -> None:
        assert alias_from_url(url) == expected


class TestCliErrors:
    """Domain errors become ClickExceptions."""

    def test_given_snip_error_when_raised_then_click_exception_with_message(self) -> None:
        with pytest.raises(click.ClickException) as exc_info, cli_errors():
            raise ConfigError.unknown_repository("work")
        assert exc_info.value.message == "Repository 'work' not found"

    def test_given_git_error_when_raised_then_click_exception(self) -> None:
        with pytest.raises(click.ClickException) as exc_info, cli_errors():
            raise RemoteError("origin", "unreachable")
        assert "unreachable" in exc_info.value.message

    def test_given_other_error_when_raised_then_propagates(self) -> None:
        with pytest.raises(KeyError), cli_errors():
            raise KeyError("x")


class TestLoadContext:
    """Collaborator wiring."""

    def test_given_home_env_when_load_then_everything_under_home(self, home: Path) -> None:
        # When
        ctx = load_context()

        # Then
        assert ctx.store.path == home / "config.yaml"
        assert ctx.store.repos_dir == home / "repos"
        assert ctx.cache.cache_dir == home / "cache"
        assert (home / "config.yaml").is_file()
