"""SyncManager — bring a working tree to the tip of a remote branch."""

from __future__ import annotations

import logging
from pathlib import Path

from gitport.config import DEFAULT_DEPTH
from gitport.errors import RepoNotFound
from gitport.models import CommitSHA, RemoteSpec, WorkingTreeState
from gitport.vcs.repo import GitEngine, sanitize_error

logger = logging.getLogger(__name__)


class SyncManager:
    """Clone-or-update orchestration over a :class:`GitEngine`.

    A sync is idempotent: repeated calls with the same arguments converge
    to the remote tip whatever the prior local state (missing tree, stale
    tree, edited tracked files, interrupted earlier sync).

    Parameters
    ----------
    engine:
        Engine performing the git mechanics.
    """

    def __init__(self, engine: GitEngine) -> None:
        self.engine = engine

    def sync(
        self,
        url: str,
        branch: str,
        path: str | Path,
        depth: int = DEFAULT_DEPTH,
    ) -> str:
        """Clone if *path* has no repository, else fetch *branch* and hard-reset.

        An existing tree is always updated from its own ``origin``; a
        different *url* is reported but not applied.

        Returns the SHA HEAD points at afterwards.
        """
        remote = RemoteSpec(url=url, branch=branch)
        state = self.engine.open_or_detect(path)

        if state is WorkingTreeState.ABSENT:
            logger.info("No repository at %s, cloning %s", path, sanitize_error(remote.url))
            self.engine.clone(remote.url, remote.branch, path, depth)
            return self.engine.head_sha(path)

        configured = self.engine.remote_url(path)
        if configured != remote.url:
            logger.warning(
                "Repository %s tracks %s, not %s; fetching from the configured remote",
                path, sanitize_error(configured), sanitize_error(remote.url),
            )

        try:
            previous = self.engine.head_sha(path)
        except RepoNotFound:
            previous = None

        tip = self.engine.fetch_branch(path, remote.branch)
        self.engine.hard_reset(path, tip)
        current = self.engine.head_sha(path)

        if previous != current:
            logger.info(
                "Updated %s: %s -> %s",
                path, CommitSHA.short(previous) if previous else None, CommitSHA.short(current),
            )
        else:
            logger.debug("Repository %s unchanged at %s", path, CommitSHA.short(current))
        return current
