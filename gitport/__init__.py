"""gitport — git sidecar serving configuration repositories over a framed channel."""

__version__ = "1.0.0"

from gitport.client import SidecarClient, SidecarError
from gitport.config import Settings, load_settings
from gitport.errors import (
    BranchNotFound,
    CommitNotFound,
    FileNotFound,
    GitPortError,
    IoError,
    NotFoundError,
    RepoNotFound,
    VcsOperationError,
)
from gitport.models import CommitInfo, CommitSHA, RemoteSpec, WorkingTreeState
from gitport.protocol.server import ServerContext, dispatch, serve
from gitport.sync.manager import SyncManager
from gitport.vcs.repo import GitEngine

__all__ = [
    "__version__",
    # Engine and orchestration
    "GitEngine",
    "SyncManager",
    # Wire
    "ServerContext",
    "SidecarClient",
    "SidecarError",
    "dispatch",
    "serve",
    # Models
    "CommitInfo",
    "CommitSHA",
    "RemoteSpec",
    "WorkingTreeState",
    # Config
    "Settings",
    "load_settings",
    # Errors
    "BranchNotFound",
    "CommitNotFound",
    "FileNotFound",
    "GitPortError",
    "IoError",
    "NotFoundError",
    "RepoNotFound",
    "VcsOperationError",
]
