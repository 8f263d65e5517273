"""In-memory virtual file system and its edit engine."""

from vfs_tools_mcp.vfs.edit_engine import EditEngine, EditResult, ViewResult
from vfs_tools_mcp.vfs.errors import (
    AlreadyExistsError,
    AmbiguousMatchError,
    InvalidLineNumberError,
    InvalidPathError,
    InvalidViewRangeError,
    IsDirectoryError,
    NoHistoryError,
    NoMatchError,
    NotDirectoryError,
    NotFoundError,
    VFSError,
)
from vfs_tools_mcp.vfs.file_system import VirtualFileSystem
from vfs_tools_mcp.vfs.nodes import DirectoryNode, FileNode, NodeType

__all__ = [
    "AlreadyExistsError",
    "AmbiguousMatchError",
    "DirectoryNode",
    "EditEngine",
    "EditResult",
    "FileNode",
    "InvalidLineNumberError",
    "InvalidPathError",
    "InvalidViewRangeError",
    "IsDirectoryError",
    "NoHistoryError",
    "NoMatchError",
    "NodeType",
    "NotDirectoryError",
    "NotFoundError",
    "VFSError",
    "ViewResult",
    "VirtualFileSystem",
]
