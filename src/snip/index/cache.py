"""Per-repository artifact cache.

One JSON file per repository alias: ``<cache_dir>/<alias>.json`` holding
``{"items": [...], "timestamp": "<iso8601>"}``. Files are always replaced
wholesale; a broken or missing file both mean "no cache".
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, ValidationError

from snip.config.constants import CACHE_FILE_SUFFIX
from snip.core.errors import CacheReadError, CacheWriteError
from snip.core.logging import get_logger
from snip.index.models import ArtifactRecord

if TYPE_CHECKING:
    from snip.config.store import Repository

log = get_logger("index.cache")


class CachedCollection(BaseModel):
    """On-disk envelope for one repository's items."""

    items: list[ArtifactRecord]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CacheStore:
    """Reads and writes cached collections under an injected directory."""

    def __init__(self, cache_dir: Path) -> None:
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def cache_file(self, alias: str) -> Path:
        return self._cache_dir / f"{alias}{CACHE_FILE_SUFFIX}"

    def save(self, alias: str, items: list[ArtifactRecord]) -> None:
        """Replace the cache for alias.

        Raises:
            CacheWriteError: on any I/O failure; a previous cache stays intact.
        """
        envelope = CachedCollection(items=list(items))
        payload = envelope.model_dump_json(indent=2)
        target = self.cache_file(alias)
        tmp_name: str | None = None
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._cache_dir,
                prefix=f".{alias}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise CacheWriteError.write_failed(alias, str(e)) from e
        log.debug("cache_saved", alias=alias, items=len(items), path=str(target))

    def load(self, alias: str) -> list[ArtifactRecord] | None:
        """Cached items for alias, or None when missing or unreadable."""
        try:
            envelope = self._read(alias)
        except CacheReadError as e:
            log.debug("cache_unreadable", alias=alias, error=e.message)
            return None
        return envelope.items if envelope is not None else None

    def cached_at(self, alias: str) -> datetime | None:
        """Write time of the stored envelope, or None."""
        try:
            envelope = self._read(alias)
        except CacheReadError:
            return None
        return envelope.timestamp if envelope is not None else None

    def load_all(self, repositories: Iterable[Repository]) -> list[ArtifactRecord]:
        """Concatenate every repository's cache in list order, skipping missing ones."""
        items: list[ArtifactRecord] = []
        for repo in repositories:
            cached = self.load(repo.alias)
            if cached:
                items.extend(cached)
        return items

    def clear(self, alias: str | None = None) -> None:
        """Remove one repository's cache, or all of them.

        Raises:
            CacheWriteError: on unexpected I/O failure. A missing file is fine.
        """
        if alias is not None:
            targets = [self.cache_file(alias)]
        elif self._cache_dir.is_dir():
            targets = sorted(self._cache_dir.glob(f"*{CACHE_FILE_SUFFIX}"))
        else:
            targets = []

        for path in targets:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise CacheWriteError.clear_failed(str(path), str(e)) from e
        log.debug("cache_cleared", alias=alias or "*", files=len(targets))

    def _read(self, alias: str) -> CachedCollection | None:
        path = self.cache_file(alias)
        if not path.is_file():
            return None
        try:
            return CachedCollection.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            raise CacheReadError.unreadable(alias, str(e)) from e
