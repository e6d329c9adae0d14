"""Tests for core/progress.py module.

Covers:
- status() styling and indentation
- pluralize()
- spinner() in non-TTY mode
- suppress_console_logs() / is_console_suppressed()
- task() success and failure reporting
"""

from __future__ import annotations

import sys
from io import StringIO
from unittest.mock import patch

import pytest

from snip.core.progress import (
    _STYLES,
    _is_tty,
    get_console,
    is_console_suppressed,
    pluralize,
    spinner,
    status,
    suppress_console_logs,
    task,
)


class TestIsTty:
    """Tests for _is_tty function."""

    def test_false_for_stringio(self) -> None:
        """Returns False for non-TTY stderr."""
        original = sys.stderr
        try:
            sys.stderr = StringIO()
            assert _is_tty() is False
        finally:
            sys.stderr = original


class TestStatus:
    """Tests for status function."""

    def test_styles_cover_known_names(self) -> None:
        assert set(_STYLES) == {"success", "error", "info", "warning", "none"}

    @pytest.mark.parametrize(("style", "mark"), [("success", "✓"), ("error", "✗"), ("warning", "!")])
    def test_given_style_when_status_then_prefix_applied(self, style: str, mark: str) -> None:
        with patch("snip.core.progress._console") as mock_console:
            status("Refreshed work", style=style)

        assert mark in mock_console.print.call_args[0][0]

    def test_given_indent_when_status_then_padded(self) -> None:
        with patch("snip.core.progress._console") as mock_console:
            status("Indented", indent=4)

        assert mock_console.print.call_args[0][0].startswith("    ")

    def test_unknown_style_prints_bare_message(self) -> None:
        with patch("snip.core.progress._console") as mock_console:
            status("plain", style="bogus")

        assert mock_console.print.call_args[0][0] == "plain"


class TestPluralize:
    """Tests for pluralize function."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "0 items"), (1, "1 item"), (4, "4 items")],
    )
    def test_default_plural(self, count: int, expected: str) -> None:
        assert pluralize(count, "item") == expected

    def test_irregular_plural(self) -> None:
        assert pluralize(2, "repository", "repositories") == "2 repositories"
        assert pluralize(1, "repository", "repositories") == "1 repository"


class TestSpinner:
    """Tests for spinner context manager."""

    def test_given_non_tty_when_spinner_then_message_printed_once(self) -> None:
        with (
            patch("snip.core.progress._is_tty", return_value=False),
            patch("snip.core.progress._console") as mock_console,
        ):
            with spinner("Indexing work"):
                pass

        mock_console.print.assert_called_once()
        assert "Indexing work..." in mock_console.print.call_args[0][0]

    def test_given_tty_when_spinner_then_logs_suppressed_inside(self) -> None:
        seen: list[bool] = []
        with (
            patch("snip.core.progress._is_tty", return_value=True),
            patch("snip.core.progress._console"),
        ):
            with spinner("Indexing work"):
                seen.append(is_console_suppressed())

        assert seen == [True]
        assert is_console_suppressed() is False


class TestSuppressConsoleLogs:
    """Tests for suppress_console_logs context manager."""

    def test_flag_reset_after_exception(self) -> None:
        with pytest.raises(RuntimeError), suppress_console_logs():
            assert is_console_suppressed() is True
            raise RuntimeError("boom")

        assert is_console_suppressed() is False


class TestTask:
    """Tests for task context manager."""

    def test_given_success_when_task_then_timing_reported(self) -> None:
        with (
            patch("snip.core.progress._is_tty", return_value=False),
            patch("snip.core.progress._console") as mock_console,
        ):
            with task("Indexing work"):
                pass

        last = mock_console.print.call_args[0][0]
        assert "✓" in last
        assert "Indexing work (" in last

    def test_given_failure_when_task_then_error_reported_and_raised(self) -> None:
        with (
            patch("snip.core.progress._is_tty", return_value=False),
            patch("snip.core.progress._console") as mock_console,
            pytest.raises(ValueError),
        ):
            with task("Indexing work"):
                raise ValueError("bad meta")

        assert "failed: bad meta" in mock_console.print.call_args[0][0]


def test_get_console_is_shared() -> None:
    assert get_console() is get_console()
