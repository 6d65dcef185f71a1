"""Global configuration: constants and environment-driven settings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Depth of history fetched by a sync request that does not name one
DEFAULT_DEPTH = 1

# Size of the big-endian length prefix in front of every frame
LENGTH_PREFIX_SIZE = 4

# Largest payload a 4-byte prefix can describe
MAX_ENCODABLE_FRAME = 2**32 - 1

# Suffixes that make a file visible to list_files
YAML_SUFFIXES = (".yaml", ".yml")

# Remote used for fetches into an existing working tree
DEFAULT_REMOTE = "origin"

# Environment keys read by load_settings, with their defaults
_CONFIG_KEYS: dict[str, Any] = {
    "GITPORT_LOG_LEVEL": "INFO",
    "GITPORT_GIT_BINARY": "git",
    "GITPORT_MAX_FRAME_SIZE": 64 * 1024 * 1024,
    # StrictHostKeyChecking for agent-authenticated remotes
    "GITPORT_SSH_HOST_KEY_CHECKING": "accept-new",
    "GITPORT_DEFAULT_DEPTH": DEFAULT_DEPTH,
}


class Settings(BaseModel):
    """Resolved process settings."""

    log_level: str = "INFO"
    git_binary: str = "git"
    max_frame_size: int = 64 * 1024 * 1024
    ssh_host_key_checking: str = "accept-new"
    default_depth: int = DEFAULT_DEPTH


def _as_int(key: str, raw: str, default: int) -> int:
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", key, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring negative %s=%r, using %d", key, raw, default)
        return default
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings: defaults, then environment variables override.

    Parameters
    ----------
    environ:
        Mapping to read from.  Defaults to :data:`os.environ`.
    """
    env = os.environ if environ is None else environ
    config: dict[str, str] = {key: str(default) for key, default in _CONFIG_KEYS.items()}

    for key in _CONFIG_KEYS:
        value = env.get(key)
        if value is not None and value.strip():
            config[key] = value.strip()

    max_frame = _as_int(
        "GITPORT_MAX_FRAME_SIZE",
        config["GITPORT_MAX_FRAME_SIZE"],
        _CONFIG_KEYS["GITPORT_MAX_FRAME_SIZE"],
    )

    return Settings(
        log_level=config["GITPORT_LOG_LEVEL"].upper(),
        git_binary=config["GITPORT_GIT_BINARY"],
        max_frame_size=min(max_frame, MAX_ENCODABLE_FRAME),
        ssh_host_key_checking=config["GITPORT_SSH_HOST_KEY_CHECKING"],
        default_depth=_as_int(
            "GITPORT_DEFAULT_DEPTH", config["GITPORT_DEFAULT_DEPTH"], DEFAULT_DEPTH,
        ),
    )

