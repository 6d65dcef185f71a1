"""Read-only inspection and commit pinning on top of the engine."""

from __future__ import annotations

import logging
from pathlib import Path

from gitport.models import CommitInfo
from gitport.vcs.repo import GitEngine

logger = logging.getLogger(__name__)


def head(engine: GitEngine, path: str | Path) -> CommitInfo:
    """Return metadata for the commit *path* currently reflects.

    Raises :class:`~gitport.errors.RepoNotFound` when there is no commit yet.
    """
    return engine.head_commit(path)


def checkout(engine: GitEngine, path: str | Path, sha: str) -> str:
    """Hard-reset *path* to *sha*, which must already be in the local store.

    Never fetches.  Returns *sha* unchanged so the call can be re-applied.
    """
    full_sha = engine.resolve_commit(path, sha)
    engine.hard_reset(path, full_sha)
    logger.info("Checked out %s at %s", path, full_sha)
    return sha


def ls_remote(engine: GitEngine, url: str, branch: str) -> str:
    """Return the tip of *branch* on *url* without fetching anything."""
    return engine.remote_branch_tip(url, branch)
