"""Working-tree file access: YAML listing and base64 reads."""

from __future__ import annotations

import base64
from pathlib import Path

from gitport.config import YAML_SUFFIXES
from gitport.errors import FileNotFound, IoError


def is_visible_yaml(name: str) -> bool:
    """Return *True* for non-hidden names ending in ``.yaml`` or ``.yml``."""
    return not name.startswith(".") and name.endswith(YAML_SUFFIXES)


def list_files(repo_path: str | Path, subpath: str | None = None) -> list[str]:
    """List visible YAML file names directly inside a directory.

    Parameters
    ----------
    repo_path:
        Working-tree root.
    subpath:
        Optional directory relative to *repo_path*.

    Returns names only (no path segments), sorted lexicographically.
    """
    directory = Path(repo_path)
    if subpath:
        directory = directory / subpath

    if not directory.exists():
        raise FileNotFound(str(directory))

    try:
        names = [
            entry.name
            for entry in directory.iterdir()
            if entry.is_file() and is_visible_yaml(entry.name)
        ]
    except OSError as exc:
        raise IoError(f"{directory}: {exc.strerror or exc}") from exc

    return sorted(names)


def read_file(repo_path: str | Path, file: str) -> str:
    """Return the bytes of *file* under *repo_path*, base64-encoded."""
    path = Path(repo_path) / file
    if not path.exists():
        raise FileNotFound(str(path))

    try:
        content = path.read_bytes()
    except OSError as exc:
        raise IoError(f"{path}: {exc.strerror or exc}") from exc

    return base64.b64encode(content).decode("ascii")
