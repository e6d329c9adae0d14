"""Repository walker: turns a repository tree into artifact records.

Layout under a repository root::

    <scope>/snippet/<category>/<file>          one artifact per file
    <scope>/boilerplate/<name>/...             one artifact per folder
    <scope>/module/<name>/...                  one artifact per folder

Dot-directories at the root are not scopes. Missing type folders are skipped.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from snip.core.errors import IndexingError, PathError
from snip.core.logging import get_logger
from snip.index.metadata import folder_sidecar, is_sidecar, load_metadata, snippet_sidecar
from snip.index.models import ArtifactRecord, ArtifactType

if TYPE_CHECKING:
    from snip.config.store import Repository

log = get_logger("index.walker")


def _sorted_entries(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


def scope_directories(repo_root: Path) -> list[Path]:
    """Immediate subdirectories of the root that are not hidden."""
    return [p for p in _sorted_entries(repo_root) if p.is_dir() and not p.name.startswith(".")]


@dataclass
class Indexer:
    """Walks repositories. Scopes are walked on a thread pool."""

    max_workers: int = 4

    def index(self, repository: Repository) -> list[ArtifactRecord]:
        """Index one repository.

        Raises:
            PathError: repository.local_path does not exist.
            IndexingError: any subtree could not be traversed.
        """
        root = Path(repository.local_path).expanduser().absolute()
        if not root.exists():
            raise PathError.missing(str(root))

        start = time.perf_counter()
        try:
            scopes = scope_directories(root)
            if self.max_workers > 1 and len(scopes) > 1:
                with ThreadPoolExecutor(
                    max_workers=min(self.max_workers, len(scopes)),
                    thread_name_prefix="snip-walker",
                ) as pool:
                    per_scope = list(
                        pool.map(lambda s: self._index_scope(s, repository.alias), scopes)
                    )
            else:
                per_scope = [self._index_scope(s, repository.alias) for s in scopes]
        except OSError as e:
            raise IndexingError.failed(repository.alias, str(e)) from e

        items = [item for scope_items in per_scope for item in scope_items]
        log.debug(
            "index_done",
            alias=repository.alias,
            scopes=len(scopes),
            items=len(items),
            elapsed_s=round(time.perf_counter() - start, 3),
        )
        return items

    def _index_scope(self, scope_dir: Path, alias: str) -> list[ArtifactRecord]:
        items: list[ArtifactRecord] = []
        for artifact_type in ArtifactType:
            type_dir = scope_dir / artifact_type.value
            if not type_dir.is_dir():
                continue
            items.extend(self._index_type(type_dir, artifact_type, alias, scope_dir.name))
        return items

    def _index_type(
        self, type_dir: Path, artifact_type: ArtifactType, alias: str, scope: str
    ) -> list[ArtifactRecord]:
        match artifact_type:
            case ArtifactType.SNIPPET:
                return _index_snippets(type_dir, alias, scope)
            case ArtifactType.BOILERPLATE | ArtifactType.MODULE:
                return _index_folders(type_dir, artifact_type, alias, scope)


def _index_folders(
    type_dir: Path, artifact_type: ArtifactType, alias: str, scope: str
) -> list[ArtifactRecord]:
    items: list[ArtifactRecord] = []
    for entry in _sorted_entries(type_dir):
        if not entry.is_dir():
            continue
        items.append(
            ArtifactRecord(
                name=entry.name,
                type=artifact_type,
                repository=alias,
                scope=scope,
                path=entry,
                metadata=load_metadata(folder_sidecar(entry)).value(),
            )
        )
    return items


def _index_snippets(snippet_dir: Path, alias: str, scope: str) -> list[ArtifactRecord]:
    items: list[ArtifactRecord] = []
    for category_dir in _sorted_entries(snippet_dir):
        if not category_dir.is_dir():
            continue
        for entry in _sorted_entries(category_dir):
            if not entry.is_file() or is_sidecar(entry.name):
                continue
            items.append(
                ArtifactRecord(
                    name=entry.stem,
                    type=ArtifactType.SNIPPET,
                    repository=alias,
                    scope=scope,
                    category=category_dir.name,
                    path=category_dir,
                    file_path=entry,
                    metadata=load_metadata(snippet_sidecar(entry)).value(),
                )
            )
    return items
