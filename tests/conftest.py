"""Shared git fixtures: bare remotes reachable over file:// and local repos."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


def run_git(*args: str, cwd: Path | None = None, input: bytes | None = None) -> str:
    """Run git, failing the test on non-zero exit; return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        input=input,
        capture_output=True,
        check=True,
    )
    return result.stdout.decode("utf-8").strip()


def configure_git_user(path: Path) -> None:
    """Set git user.name, user.email, and disable GPG signing in a temp repo."""
    run_git("config", "user.email", "test@example.com", cwd=path)
    run_git("config", "user.name", "Test User", cwd=path)
    run_git("config", "commit.gpgsign", "false", cwd=path)


def init_repo(path: Path) -> Path:
    """Create an empty, commit-less repository on branch main."""
    path.mkdir(parents=True, exist_ok=True)
    run_git("init", "-q", "-b", "main", cwd=path)
    configure_git_user(path)
    return path


def commit_files(path: Path, files: dict[str, str | bytes], message: str) -> str:
    """Write *files*, stage everything, commit, and return the new SHA."""
    for name, content in files.items():
        target = path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    run_git("add", "-A", cwd=path)
    run_git("commit", "-q", "-m", message, cwd=path)
    return run_git("rev-parse", "HEAD", cwd=path)


class RemoteRepo:
    """A bare repository plus a seed clone used to publish commits to it."""

    def __init__(self, root: Path) -> None:
        self.bare = root / "remote.git"
        self.seed = root / "seed"
        self.bare.mkdir(parents=True)
        run_git("init", "-q", "--bare", "-b", "main", cwd=self.bare)
        init_repo(self.seed)
        run_git("remote", "add", "origin", str(self.bare), cwd=self.seed)

    @property
    def url(self) -> str:
        return self.bare.as_uri()

    def commit(
        self,
        files: dict[str, str | bytes],
        message: str = "update",
        branch: str = "main",
    ) -> str:
        """Commit *files* on *branch* and push; return the pushed SHA."""
        current = run_git("symbolic-ref", "--short", "HEAD", cwd=self.seed)
        if current != branch:
            exists = subprocess.run(
                ["git", "rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"],
                cwd=self.seed, capture_output=True,
            ).returncode == 0
            run_git("checkout", "-q", *([branch] if exists else ["-b", branch]), cwd=self.seed)
        sha = commit_files(self.seed, files, message)
        run_git("push", "-q", "-f", "origin", f"HEAD:refs/heads/{branch}", cwd=self.seed)
        return sha

    def tip(self, branch: str = "main") -> str:
        return run_git("rev-parse", f"refs/heads/{branch}", cwd=self.bare)


@pytest.fixture()
def remote(tmp_path: Path) -> RemoteRepo:
    """A remote with one commit on main containing two manifests."""
    repo = RemoteRepo(tmp_path / "upstream")
    repo.commit(
        {"app.yaml": "replicas: 1\n", "deploy/service.yml": "port: 80\n"},
        message="Initial commit",
    )
    return repo


@pytest.fixture()
def two_commit_repo(tmp_path: Path) -> tuple[Path, str, str]:
    """A local repo where file.txt is 'v1' at the first commit and 'v2' at the second."""
    path = init_repo(tmp_path / "local")
    first = commit_files(path, {"file.txt": "v1"}, "First commit")
    second = commit_files(path, {"file.txt": "v2"}, "Second commit")
    return path, first, second
