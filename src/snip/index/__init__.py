"""Artifact indexing, caching and retrieval."""

from snip.index.cache import CachedCollection, CacheStore
from snip.index.metadata import MetadataResult, MetadataStatus, load_metadata
from snip.index.models import ArtifactMetadata, ArtifactRecord, ArtifactType, SearchResult
from snip.index.refresh import RefreshReport, refresh_repositories, refresh_repository
from snip.index.scopes import autocomplete_scopes, available_scopes, validate_scope
from snip.index.search import filter_by_scope, fuzzy_score, search
from snip.index.walker import Indexer

__all__ = [
    "ArtifactMetadata",
    "ArtifactRecord",
    "ArtifactType",
    "CacheStore",
    "CachedCollection",
    "Indexer",
    "MetadataResult",
    "MetadataStatus",
    "RefreshReport",
    "SearchResult",
    "autocomplete_scopes",
    "available_scopes",
    "filter_by_scope",
    "fuzzy_score",
    "load_metadata",
    "refresh_repositories",
    "refresh_repository",
    "search",
    "validate_scope",
]
