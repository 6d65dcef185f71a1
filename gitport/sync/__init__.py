"""Repository synchronisation."""

from gitport.sync.manager import SyncManager

__all__ = ["SyncManager"]
