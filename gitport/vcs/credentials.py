"""Credential resolution for remote git operations.

A username embedded in the remote URL selects SSH-agent authentication for
that user; anything else falls back to the ambient credentials of the
environment (credential helpers, default identities).  The policy is
evaluated for every connection and nothing is cached between calls.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

AGENT = "agent"
DEFAULT = "default"

# user@host:path with no scheme
_SCP_LIKE = re.compile(r"^(?P<user>[^@/:]+)@(?P<host>[^:/]+):(?!//)")


@dataclass
class CredentialPolicy:
    """How one remote connection authenticates."""

    mode: str
    username: str | None = None
    env: dict[str, str] = field(default_factory=dict)


def username_from_url(url: str) -> str | None:
    """Return the username embedded in *url*, or None."""
    match = _SCP_LIKE.match(url)
    if match:
        return match.group("user")
    if "://" not in url:
        return None
    try:
        return urlparse(url).username or None
    except ValueError:
        return None


def resolve_credentials(
    url: str,
    host_key_checking: str = "accept-new",
    environ: Mapping[str, str] | None = None,
) -> CredentialPolicy:
    """Decide the authentication mode for a connection to *url*.

    Parameters
    ----------
    url:
        Remote URL, in any form git accepts.
    host_key_checking:
        Value passed to ssh's ``StrictHostKeyChecking`` in agent mode.
    environ:
        Environment to inspect for ``SSH_AUTH_SOCK``.  Defaults to
        :data:`os.environ`.
    """
    env = os.environ if environ is None else environ
    username = username_from_url(url)

    if username is None:
        return CredentialPolicy(mode=DEFAULT)

    if not env.get("SSH_AUTH_SOCK"):
        logger.warning("No SSH agent available for user %s; authentication may fail", username)

    ssh_cmd = f"ssh -o BatchMode=yes -o StrictHostKeyChecking={host_key_checking}"
    return CredentialPolicy(
        mode=AGENT,
        username=username,
        env={"GIT_SSH_COMMAND": ssh_cmd},
    )
