"""Artifact records produced by the walker and consumed by cache and search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ArtifactType(str, Enum):
    """Closed set of artifact kinds. Each has its own on-disk layout."""

    SNIPPET = "snippet"
    BOILERPLATE = "boilerplate"
    MODULE = "module"

    @property
    def is_folder_based(self) -> bool:
        return self is not ArtifactType.SNIPPET


_TEXT_FIELDS = ("description", "example", "source")


class ArtifactMetadata(BaseModel):
    """Optional sidecar metadata. Unknown keys are kept as-is.

    Any JSON object is accepted. A known field with the wrong type is
    dropped on its own; the other fields survive. A bare string in
    ``tags`` becomes a one-tag list and non-string tags are skipped.
    """

    model_config = ConfigDict(extra="allow")

    description: str | None = None
    example: str | None = None
    source: str | None = None
    tags: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def drop_mistyped_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in _TEXT_FIELDS:
            if key in data and not isinstance(data[key], str):
                del data[key]
        if "tags" in data:
            tags = data["tags"]
            if isinstance(tags, str):
                data["tags"] = [tags]
            elif isinstance(tags, list):
                data["tags"] = [t for t in tags if isinstance(t, str)]
            else:
                del data["tags"]
        return data


class ArtifactRecord(BaseModel):
    """One discoverable artifact.

    ``path`` is the artifact's own directory for folder-based types and the
    category directory for snippets; ``file_path`` is set only for snippets.
    """

    name: str = Field(min_length=1)
    type: ArtifactType
    repository: str
    scope: str
    category: str | None = None
    path: Path
    file_path: Path | None = None
    metadata: ArtifactMetadata | None = None

    @model_validator(mode="after")
    def check_type_shape(self) -> ArtifactRecord:
        if self.type is ArtifactType.SNIPPET:
            if self.file_path is None:
                raise ValueError("snippet records require file_path")
            if self.category is None:
                raise ValueError("snippet records require category")
        elif self.file_path is not None:
            raise ValueError(f"{self.type.value} records must not have file_path")
        return self

    @property
    def location(self) -> str:
        """Display key: repo/scope[/category]/name."""
        parts = [self.repository, self.scope]
        if self.category:
            parts.append(self.category)
        parts.append(self.name)
        return "/".join(parts)

    @property
    def description(self) -> str:
        if self.metadata and self.metadata.description:
            return self.metadata.description
        return ""

    @property
    def tags(self) -> list[str]:
        if self.metadata and self.metadata.tags:
            return list(self.metadata.tags)
        return []


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A ranked artifact. Scores only compare within one query."""

    item: ArtifactRecord
    score: float
