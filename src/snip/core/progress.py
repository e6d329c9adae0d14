"""Terminal feedback for snip commands.

All of it goes to stderr so stdout stays clean for ``--json`` and
``pull --print``. When stderr is not a terminal, spinners degrade to a
single "message..." line.

    status("Indexed 42 artifacts", style="success")   # ✓ Indexed 42 artifacts
    with spinner("Cloning repository"):
        clone()
"""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

_state = threading.local()


def get_console() -> Console:
    return _console


def _is_tty() -> bool:
    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty())


def is_console_suppressed() -> bool:
    """True while a spinner is drawing; console log handlers check this."""
    return getattr(_state, "suppressed", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    previous = is_console_suppressed()
    _state.suppressed = True
    try:
        yield
    finally:
        _state.suppressed = previous


def _log(event: str, **fields: object) -> None:
    from snip.core.logging import get_logger

    get_logger("progress").debug(event, **fields)


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one styled line. Unknown styles print the bare message."""
    _console.print(f"{' ' * indent}{_STYLES.get(style, '')}{message}", highlight=False)
    _log("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


@contextmanager
def spinner(message: str, *, indent: int = 0) -> Iterator[None]:
    """Show a spinner for the duration of the block."""
    text = f"{' ' * indent}{message}"
    if not _is_tty():
        _console.print(f"{text}...", highlight=False)
        yield
        return

    with suppress_console_logs(), _console.status(f"[cyan]{text}[/cyan]", spinner="dots"):
        yield


@contextmanager
def task(name: str) -> Iterator[None]:
    """Spinner plus a final ✓/✗ line with the elapsed time."""
    started = time.perf_counter()
    try:
        with spinner(name):
            yield
    except Exception as e:
        status(f"{name} failed: {e}", style="error")
        _log("task_failed", task=name, elapsed_s=time.perf_counter() - started, error=str(e))
        raise

    elapsed = time.perf_counter() - started
    status(f"{name} ({elapsed:.1f}s)", style="success")
    _log("task_done", task=name, elapsed_s=elapsed)
