"""Pure helpers for turning slash-separated paths into tree segments."""

from vfs_tools_mcp.vfs.errors import NotFoundError
from vfs_tools_mcp.vfs.nodes import DirectoryNode, Node

ROOT_PATH = "/"


def split_path(path: str) -> list[str]:
    """
    Split a path into its non-empty segments.

    Leading, trailing and repeated slashes are dropped. Segments are matched
    literally, so ``.`` and ``..`` carry no special meaning.

    Args:
        path: An absolute (or root-relative) slash-separated path.

    Returns:
        The ordered list of segments; empty for the root.
    """
    return [segment for segment in path.split("/") if segment]


def join_path(segments: list[str]) -> str:
    """Build the canonical absolute path for a list of segments."""
    return ROOT_PATH + "/".join(segments)


def normalize_path(path: str) -> str:
    """Return the canonical absolute form of ``path``."""
    return join_path(split_path(path))


def resolve_node(root: DirectoryNode, segments: list[str]) -> Node:
    """
    Walk the tree from ``root`` following ``segments``.

    Args:
        root: The root directory of the tree.
        segments: Segments as produced by :func:`split_path`.

    Returns:
        The node found at the end of the walk. The root itself for no segments.

    Raises:
        NotFoundError: If a segment is missing or an intermediate node is a file.
    """
    node: Node = root
    for index, segment in enumerate(segments):
        if not isinstance(node, DirectoryNode):
            raise NotFoundError(join_path(segments[: index + 1]))
        child = node.children.get(segment)
        if child is None:
            raise NotFoundError(join_path(segments[: index + 1]))
        node = child
    return node
