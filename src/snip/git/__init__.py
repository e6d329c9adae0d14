"""Git sync for content repositories."""

from snip.git.errors import (
    AuthenticationError,
    GitError,
    GitUnavailableError,
    NotARepositoryError,
    RemoteError,
    SyncError,
)
from snip.git.sync import GitSync

__all__ = [
    "AuthenticationError",
    "GitError",
    "GitSync",
    "GitUnavailableError",
    "NotARepositoryError",
    "RemoteError",
    "SyncError",
]
