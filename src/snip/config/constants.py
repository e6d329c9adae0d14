"""Configuration constants.

Values here are fixed by the on-disk convention or are hard caps; they are
NOT user-configurable. For configurable values, see models.py.
"""

# =============================================================================
# Repository Layout Convention
# =============================================================================

SNIPPET_DIR = "snippet"
BOILERPLATE_DIR = "boilerplate"
MODULE_DIR = "module"

FOLDER_META_FILE = "meta.json"
"""Sidecar inside a boilerplate/module folder."""

SNIPPET_META_SUFFIX = ".meta.json"
"""Sidecar beside a snippet file: foo.js -> foo.meta.json."""

# =============================================================================
# Search
# =============================================================================

SEARCH_MAX_RESULTS = 100
"""Maximum results a single search may return."""

DEFAULT_MIN_SCORE = 0.3
"""Results scoring at or below this are discarded."""

# =============================================================================
# Cache / Store Defaults
# =============================================================================

DEFAULT_CACHE_EXPIRY_HOURS = 2.0
"""Hours before a repository's cache is considered stale."""

CACHE_FILE_SUFFIX = ".json"

# =============================================================================
# Delivery
# =============================================================================

PREVIEW_MAX_LINES = 10
PREVIEW_MAX_FILES = 8
PICKER_PAGE_SIZE = 20
