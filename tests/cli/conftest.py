"""Test fixtures for CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Each invocation configures logging against CliRunner's streams."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated storage root for every command in the test."""
    path = tmp_path / "snip-home"
    for key in ("SNIP__LOGGING__LEVEL", "SNIP__SEARCH__THRESHOLD", "SNIP__SEARCH__MAX_RESULTS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SNIP__STORAGE__HOME", str(path))
    return path
