"""Sidecar metadata loading.

Metadata is advisory: a sidecar that is missing and one that does not parse
to a JSON object both end up as ``None`` on the record, but the loader
reports which one happened. Mistyped fields inside an object are dropped
individually (see ArtifactMetadata).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from snip.config.constants import FOLDER_META_FILE, SNIPPET_META_SUFFIX
from snip.core.logging import get_logger
from snip.index.models import ArtifactMetadata

log = get_logger("index.metadata")


class MetadataStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class MetadataResult:
    """Outcome of reading one sidecar file."""

    status: MetadataStatus
    metadata: ArtifactMetadata | None = None
    reason: str | None = None

    def value(self) -> ArtifactMetadata | None:
        """Collapse absent/invalid to None for record construction."""
        return self.metadata if self.status is MetadataStatus.PRESENT else None


def is_sidecar(file_name: str) -> bool:
    return file_name.endswith(SNIPPET_META_SUFFIX)


def folder_sidecar(item_dir: Path) -> Path:
    """meta.json inside a boilerplate/module folder."""
    return item_dir / FOLDER_META_FILE


def snippet_sidecar(snippet_file: Path) -> Path:
    """<stem>.meta.json beside a snippet file."""
    return snippet_file.with_name(f"{snippet_file.stem}{SNIPPET_META_SUFFIX}")


def load_metadata(meta_path: Path) -> MetadataResult:
    """Read a sidecar. Any JSON object is present; never raises."""
    if not meta_path.is_file():
        return MetadataResult(MetadataStatus.ABSENT)

    try:
        raw = json.loads(meta_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        log.debug("metadata_invalid", path=str(meta_path), error=str(e))
        return MetadataResult(MetadataStatus.INVALID, reason=str(e))

    if not isinstance(raw, dict):
        reason = f"expected an object, got {type(raw).__name__}"
        log.debug("metadata_invalid", path=str(meta_path), error=reason)
        return MetadataResult(MetadataStatus.INVALID, reason=reason)

    return MetadataResult(MetadataStatus.PRESENT, metadata=ArtifactMetadata.model_validate(raw))
