"""VCS engine — git CLI wrapper, credential policy, and commit parsing."""

from gitport.vcs.credentials import CredentialPolicy, resolve_credentials
from gitport.vcs.repo import GitEngine, sanitize_error

__all__ = ["CredentialPolicy", "GitEngine", "resolve_credentials", "sanitize_error"]
