"""Error taxonomy for sidecar operations.

Every operation-level failure is a :class:`GitPortError`.  The string form
of an error is exactly what the host sees in an ``{"err": ...}`` response,
so messages are kept short and stable.
"""

from __future__ import annotations


class GitPortError(Exception):
    """Base class for failures reported back to the host as an error response."""


class VcsOperationError(GitPortError):
    """The underlying git invocation failed (network, auth, corruption)."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"git error: {detail}")


class IoError(GitPortError):
    """Local filesystem access failed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"io error: {detail}")


class NotFoundError(GitPortError):
    """Something the caller named does not exist."""


class RepoNotFound(NotFoundError):
    """No repository, or no recoverable HEAD, at the given location."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"repository not found at {location}")


class BranchNotFound(NotFoundError):
    """The named branch is absent on the remote."""

    def __init__(self, branch: str) -> None:
        self.branch = branch
        super().__init__(f"branch '{branch}' not found")


class FileNotFound(NotFoundError):
    """A requested file or directory is absent."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"file not found: {path}")


class CommitNotFound(NotFoundError):
    """A commit SHA does not resolve in the local object store."""

    def __init__(self, sha: str) -> None:
        self.sha = sha
        super().__init__(f"commit not found: {sha}")
