"""Operations exposed to the host besides synchronisation."""

from gitport.ops.files import list_files, read_file
from gitport.ops.inspection import checkout, head, ls_remote

__all__ = ["checkout", "head", "list_files", "ls_remote", "read_file"]
