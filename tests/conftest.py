"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides content-repository builders shared across test packages.
"""

import json
import sys
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from snip.config.store import Repository  # noqa: E402


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def write_json(path: Path, data: Any) -> Path:
    return write_file(path, json.dumps(data))


@pytest.fixture
def content_repo(tmp_path: Path) -> Path:
    """A small content repository.

    Layout::

        js/snippet/hooks/useFetch.js (+ useFetch.meta.json)
        js/snippet/hooks/useDebounce.js
        js/boilerplate/express-app/{meta.json,index.js,lib/server.js}
        py/module/auth/{meta.json,auth.py}
    """
    root = tmp_path / "content"
    write_file(root / "js/snippet/hooks/useFetch.js", "export function useFetch() {}\n")
    write_json(
        root / "js/snippet/hooks/useFetch.meta.json",
        {"description": "React data fetching hook", "tags": ["react", "http"]},
    )
    write_file(root / "js/snippet/hooks/useDebounce.js", "export function useDebounce() {}\n")
    write_json(
        root / "js/boilerplate/express-app/meta.json",
        {"description": "Express server starter", "tags": ["node"]},
    )
    write_file(root / "js/boilerplate/express-app/index.js", "require('./lib/server')\n")
    write_file(root / "js/boilerplate/express-app/lib/server.js", "module.exports = {}\n")
    write_json(root / "py/module/auth/meta.json", {"description": "JWT helpers"})
    write_file(root / "py/module/auth/auth.py", "def login():\n    pass\n")
    return root


@pytest.fixture
def make_repository() -> Callable[..., Repository]:
    """Factory for Repository records with sensible defaults."""

    def _make(
        alias: str,
        local_path: Path,
        url: str = "",
        last_updated: datetime | None = None,
    ) -> Repository:
        return Repository(
            alias=alias,
            url=url,
            local_path=local_path,
            last_updated=last_updated or datetime.now(UTC),
        )

    return _make
