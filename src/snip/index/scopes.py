"""Scope strings: "alias" or "alias/scope"."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snip.config.store import Repository
    from snip.index.models import ArtifactRecord


def autocomplete_scopes(items: Iterable[ArtifactRecord]) -> list[str]:
    """Every alias and alias/scope seen in items, sorted."""
    scopes: set[str] = set()
    for item in items:
        scopes.add(item.repository)
        scopes.add(f"{item.repository}/{item.scope}")
    return sorted(scopes)


def available_scopes(
    repositories: Iterable[Repository], items: Iterable[ArtifactRecord]
) -> list[str]:
    """Configured aliases (even ones with no cached items) plus cached alias/scope pairs."""
    scopes = {repo.alias for repo in repositories}
    scopes.update(f"{item.repository}/{item.scope}" for item in items)
    return sorted(scopes)


def validate_scope(scope: str, repositories: Iterable[Repository]) -> bool:
    """True if the alias part of scope names a configured repository."""
    alias = scope.split("/", 1)[0]
    if not alias:
        return False
    return any(repo.alias == alias for repo in repositories)
