"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class GitUnavailableError(GitError):
    """The git executable could not be run."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"git is not available: {reason}")
        self.reason = reason


class NotARepositoryError(GitError):
    """Path is not a git working tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RemoteError(GitError):
    """Error communicating with remote."""

    def __init__(self, remote: str, message: str) -> None:
        super().__init__(f"Remote error ({remote}): {message}")
        self.remote = remote


class AuthenticationError(GitError):
    """Authentication failed for remote operation."""

    def __init__(self, remote: str, operation: str | None = None) -> None:
        op_part = f" during {operation}" if operation else ""
        super().__init__(f"Authentication failed for remote {remote!r}{op_part}")
        self.remote = remote
        self.operation = operation


class SyncError(GitError):
    """Local checkout cannot be fast-forwarded to its upstream."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Cannot update {path}: {message}")
        self.path = path
