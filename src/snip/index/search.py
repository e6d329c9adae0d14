"""Scope filtering and fuzzy ranking over artifact records.

Scores are in [0, 1] and only comparable within a single query:

- contiguous substring: 0.7, +0.2 if it starts on a word boundary,
  +0.1 scaled by how much of the text it covers (exact match = 1.0)
- in-order but scattered: up to 0.65, proportional to how many query
  characters sit next to their predecessor in the best alignment
- characters missing or out of order: 0.0
"""

from __future__ import annotations

from collections.abc import Sequence

from snip.config.constants import DEFAULT_MIN_SCORE
from snip.index.models import ArtifactRecord, SearchResult

_SUBSTRING_BASE = 0.7
_BOUNDARY_BONUS = 0.2
_COVERAGE_BONUS = 0.1
_SUBSEQUENCE_MAX = 0.65


def _is_boundary(text: str, pos: int) -> bool:
    return pos == 0 or not text[pos - 1].isalnum()


def _adjacent_pairs(query: str, text: str, start: int) -> int | None:
    """Greedy in-order alignment from text[start]; count adjacent matches.

    Returns None if the query cannot be completed from this start.
    """
    pairs = 0
    prev = start
    for ch in query[1:]:
        pos = text.find(ch, prev + 1)
        if pos == -1:
            return None
        if pos == prev + 1:
            pairs += 1
        prev = pos
    return pairs


def fuzzy_score(query: str, text: str) -> float:
    """Case-insensitive relevance of query to text."""
    q = query.lower()
    t = text.lower()
    if not q or not t:
        return 0.0
    if q == t:
        return 1.0

    pos = t.find(q)
    if pos != -1:
        # Prefer a boundary-aligned occurrence when there is one
        boundary_pos = pos
        while boundary_pos != -1 and not _is_boundary(t, boundary_pos):
            boundary_pos = t.find(q, boundary_pos + 1)
        score = _SUBSTRING_BASE + _COVERAGE_BONUS * (len(q) / len(t))
        if boundary_pos != -1:
            score += _BOUNDARY_BONUS
        return min(score, 1.0)

    if len(q) == 1:
        return 0.0

    best: int | None = None
    start = t.find(q[0])
    while start != -1:
        pairs = _adjacent_pairs(q, t, start)
        if pairs is None:
            # Later starts only leave less text to match in
            break
        if best is None or pairs > best:
            best = pairs
        start = t.find(q[0], start + 1)

    if best is None:
        return 0.0
    return _SUBSEQUENCE_MAX * best / (len(q) - 1)


def search_text(item: ArtifactRecord) -> str:
    """Lowercased haystack: name, category, scope, description, tags."""
    parts: list[str | None] = [item.name, item.category, item.scope, item.description]
    parts.extend(item.tags)
    return " ".join(p for p in parts if p).lower()


def filter_by_scope(items: Sequence[ArtifactRecord], scope: str | None) -> list[ArtifactRecord]:
    """Keep items inside scope.

    "alias/name" requires both the repository and scope to match. A bare
    string matches either the repository alias or the scope name.
    """
    if not scope:
        return list(items)
    if "/" in scope:
        alias, scope_name = scope.split("/", 1)
        return [i for i in items if i.repository == alias and i.scope == scope_name]
    return [i for i in items if i.repository == scope or i.scope == scope]


def search(
    items: Sequence[ArtifactRecord],
    query: str,
    scope: str | None = None,
    *,
    threshold: float = DEFAULT_MIN_SCORE,
) -> list[SearchResult]:
    """Filter by scope, then rank by query. Empty query returns everything at 1.0."""
    candidates = filter_by_scope(items, scope)

    if not query.strip():
        return [SearchResult(item=item, score=1.0) for item in candidates]

    results: list[SearchResult] = []
    for item in candidates:
        score = fuzzy_score(query, search_text(item))
        if score > threshold:
            results.append(SearchResult(item=item, score=score))

    results.sort(key=lambda r: r.score, reverse=True)
    return results
