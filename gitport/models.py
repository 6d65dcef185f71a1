"""Domain models shared by the engine, the operations, and the wire layer."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel

_SHA_PATTERN = re.compile(r"^[0-9a-fA-F]{40}$")
SHORT_SHA_LENGTH = 7


class WorkingTreeState(str, Enum):
    """Whether a path holds version-control metadata."""

    ABSENT = "absent"
    PRESENT = "present"


class RemoteSpec(BaseModel):
    """A remote branch.  Authentication is resolved per connection, not stored."""

    url: str
    branch: str


class CommitInfo(BaseModel):
    """Metadata of a single commit, recomputed on every query."""

    sha: str
    author: str = ""
    email: str = ""
    message: str = ""
    timestamp: int = 0
    """Committer time, seconds since the epoch."""


class CommitSHA:
    """Validation helpers for full 40-character commit identifiers."""

    @staticmethod
    def is_valid(sha: object) -> bool:
        """Return *True* if *sha* is exactly 40 hexadecimal characters."""
        return isinstance(sha, str) and bool(_SHA_PATTERN.match(sha))

    @staticmethod
    def normalize(sha: str) -> str:
        """Return *sha* lowercased, raising :class:`ValueError` if invalid."""
        if not CommitSHA.is_valid(sha):
            raise ValueError(f"invalid commit SHA: {sha!r}")
        return sha.lower()

    @staticmethod
    def short(sha: str) -> str:
        """Return the conventional 7-character abbreviation."""
        return CommitSHA.normalize(sha)[:SHORT_SHA_LENGTH]
