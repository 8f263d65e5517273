"""In-memory hierarchical file system edited by agent tool calls."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from vfs_tools_mcp.models.snapshot import FileSystemSnapshot, SerializedNode
from vfs_tools_mcp.vfs.errors import (
    AlreadyExistsError,
    InvalidPathError,
    IsDirectoryError,
    NotDirectoryError,
    NotFoundError,
)
from vfs_tools_mcp.vfs.nodes import DirectoryNode, FileNode, Node, NodeType
from vfs_tools_mcp.vfs.path_utils import ROOT_PATH, join_path, normalize_path, resolve_node, split_path

logger = logging.getLogger(__name__)

SerializedNodes = Mapping[str, SerializedNode | Mapping[str, Any]]


class VirtualFileSystem:
    """
    A tree of files and directories living entirely in memory.

    The root is always a directory. Every mutating operation either succeeds
    completely or raises a :class:`VFSError` subclass and leaves the tree
    untouched. Callers only ever get strings, lists and fresh dicts back,
    never references to internal nodes.
    """

    def __init__(self, max_history: int = 0) -> None:
        self._root = DirectoryNode()
        self._max_history = max_history

    @classmethod
    def from_snapshot(
        cls, nodes: SerializedNodes | FileSystemSnapshot | None, max_history: int = 0
    ) -> "VirtualFileSystem":
        """Build a file system from a serialized snapshot, or an empty one for ``None``."""
        vfs = cls(max_history=max_history)
        if nodes:
            vfs.deserialize_from_nodes(nodes)
        return vfs

    # --- Lookups ---

    def _resolve(self, path: str) -> Node:
        return resolve_node(self._root, split_path(path))

    def _resolve_file(self, path: str) -> FileNode:
        node = self._resolve(path)
        if isinstance(node, DirectoryNode):
            raise IsDirectoryError(normalize_path(path))
        return node

    def _resolve_directory(self, path: str) -> DirectoryNode:
        node = self._resolve(path)
        if not isinstance(node, DirectoryNode):
            raise NotDirectoryError(normalize_path(path))
        return node

    def exists(self, path: str) -> bool:
        try:
            self._resolve(path)
        except NotFoundError:
            return False
        return True

    def is_directory(self, path: str) -> bool:
        try:
            return isinstance(self._resolve(path), DirectoryNode)
        except NotFoundError:
            return False

    def _check_parents(self, segments: list[str]) -> None:
        """Fail if an existing node along ``segments`` is a file, without mutating anything."""
        node: Node = self._root
        for index, segment in enumerate(segments):
            child = node.get(segment)
            if child is None:
                return
            if not isinstance(child, DirectoryNode):
                raise NotDirectoryError(join_path(segments[: index + 1]))
            node = child

    def _ensure_directory(self, segments: list[str]) -> DirectoryNode:
        """Return the directory at ``segments``, creating missing ones along the way."""
        self._check_parents(segments)
        node = self._root
        for index, segment in enumerate(segments):
            child = node.get(segment)
            if child is None:
                child = DirectoryNode()
                node.add(segment, child)
                logger.debug(f"Created intermediate directory {segment!r}")
            if not isinstance(child, DirectoryNode):
                raise NotDirectoryError(join_path(segments[: index + 1]))
            node = child
        return node

    # --- Operations ---

    def read(self, path: str) -> str:
        """Return the content of the file at ``path``."""
        return self._resolve_file(path).content

    def write(self, path: str, content: str) -> bool:
        """
        Create or overwrite the file at ``path``.

        Missing intermediate directories are created. Overwriting an existing
        file records its prior content in the file's history.

        Returns:
            True if the file was created, False if it was overwritten.

        Raises:
            IsDirectoryError: If ``path`` is the root or an existing directory.
            NotDirectoryError: If an intermediate segment is an existing file.
        """
        segments = split_path(path)
        normalized = join_path(segments)
        if not segments:
            raise IsDirectoryError(ROOT_PATH)

        *parent_segments, name = segments
        parent = self._ensure_directory(parent_segments)
        existing = parent.get(name)
        if isinstance(existing, DirectoryNode):
            raise IsDirectoryError(normalized)
        if existing is not None:
            existing.push_history(existing.content)
            existing.content = content
            logger.debug(f"Overwrote {normalized} ({len(existing.history)} history entries)")
            return False

        parent.add(name, FileNode(content=content, max_history=self._max_history))
        logger.debug(f"Created file {normalized}")
        return True

    def restore_previous(self, path: str) -> str | None:
        """
        Pop the most recent history entry of a file and make it the current content.

        The undone content is not recorded, so repeated calls walk further back.

        Returns:
            The restored content, or ``None`` when the file has no history.
        """
        node = self._resolve_file(path)
        previous = node.pop_history()
        if previous is not None:
            node.content = previous
        return previous

    def history(self, path: str) -> list[str]:
        """Return a copy of the history of the file at ``path``, oldest first."""
        return list(self._resolve_file(path).history)

    def mkdir(self, path: str) -> None:
        """Create a directory and any missing parents.

        Raises:
            AlreadyExistsError: If a node already exists at ``path``.
        """
        segments = split_path(path)
        if self.exists(path):
            raise AlreadyExistsError(join_path(segments))
        self._ensure_directory(segments)
        logger.debug(f"Created directory {join_path(segments)}")

    def delete(self, path: str) -> None:
        """Remove the file or directory (recursively) at ``path``."""
        segments = split_path(path)
        if not segments:
            raise InvalidPathError("Cannot delete the root directory.", ROOT_PATH)
        self._resolve(path)
        parent = self._resolve_directory(join_path(segments[:-1]))
        parent.remove(segments[-1])
        logger.debug(f"Deleted {join_path(segments)}")

    def rename(self, old_path: str, new_path: str) -> None:
        """
        Move the node at ``old_path`` to ``new_path``.

        Content, history and children travel with the node. Intermediate
        directories of ``new_path`` are created as needed.

        Raises:
            NotFoundError: If ``old_path`` does not exist.
            AlreadyExistsError: If ``new_path`` already exists.
            InvalidPathError: If either path is the root, or a directory would
                be moved into its own subtree.
        """
        old_segments = split_path(old_path)
        new_segments = split_path(new_path)
        old_normalized = join_path(old_segments)
        new_normalized = join_path(new_segments)

        if not old_segments:
            raise InvalidPathError("Cannot rename the root directory.", ROOT_PATH)
        if not new_segments:
            raise AlreadyExistsError(ROOT_PATH)

        node = self._resolve(old_normalized)
        if self.exists(new_normalized):
            raise AlreadyExistsError(new_normalized)
        if isinstance(node, DirectoryNode) and new_segments[: len(old_segments)] == old_segments:
            raise InvalidPathError(
                f"Cannot move directory {old_normalized} into its own subtree {new_normalized}.",
                new_normalized,
            )
        self._check_parents(new_segments[:-1])

        old_parent = self._resolve_directory(join_path(old_segments[:-1]))
        old_parent.remove(old_segments[-1])
        new_parent = self._ensure_directory(new_segments[:-1])
        new_parent.add(new_segments[-1], node)
        logger.debug(f"Renamed {old_normalized} to {new_normalized}")

    def list(self, path: str = ROOT_PATH) -> list[tuple[str, NodeType]]:
        """Return ``(name, type)`` pairs for the immediate children of a directory."""
        return self._resolve_directory(path).entries()

    def walk(self) -> Iterator[tuple[str, NodeType]]:
        """Yield ``(path, type)`` for every node below the root, parents before children."""
        yield from self._walk_from([], self._root)

    def _walk_from(self, segments: list[str], directory: DirectoryNode) -> Iterator[tuple[str, NodeType]]:
        for name, child in directory.children.items():
            child_segments = segments + [name]
            yield join_path(child_segments), child.type
            if isinstance(child, DirectoryNode):
                yield from self._walk_from(child_segments, child)

    def file_count(self) -> int:
        return sum(1 for _, node_type in self.walk() if node_type is NodeType.FILE)

    # --- Serialization ---

    def serialize(self) -> dict[str, dict[str, str]]:
        """
        Flatten the tree into a path-keyed mapping.

        Every file and directory is included, directories before their
        children. File history is session-local and is not serialized.
        """
        nodes: dict[str, dict[str, str]] = {}
        for path, node_type in self.walk():
            if node_type is NodeType.DIRECTORY:
                nodes[path] = {"type": NodeType.DIRECTORY.value}
            else:
                nodes[path] = {"type": NodeType.FILE.value, "content": self.read(path)}
        logger.debug(f"Serialized {len(nodes)} nodes")
        return nodes

    def deserialize_from_nodes(self, nodes: SerializedNodes | FileSystemSnapshot) -> None:
        """
        Replace the tree with the one described by a serialized mapping.

        Accepts the shape produced by :meth:`serialize`. Keys are normalized,
        intermediate directories are created implicitly and the root entry is
        ignored. On failure the previous tree is kept.

        Raises:
            IsDirectoryError: If a file record collides with a directory.
            NotDirectoryError: If a record needs an existing file as its parent.
            pydantic.ValidationError: If a record has an unknown shape.
        """
        if isinstance(nodes, FileSystemSnapshot):
            nodes = nodes.root

        previous_root = self._root
        self._root = DirectoryNode()
        try:
            for raw_path, raw_record in nodes.items():
                record = (
                    raw_record
                    if isinstance(raw_record, SerializedNode)
                    else SerializedNode.model_validate(raw_record)
                )
                self._load_record(split_path(raw_path), record)
        except Exception:
            self._root = previous_root
            raise
        logger.debug(f"Deserialized {len(nodes)} nodes")

    def _load_record(self, segments: list[str], record: SerializedNode) -> None:
        if not segments:
            return
        normalized = join_path(segments)
        if record.type == NodeType.DIRECTORY.value:
            if self.exists(normalized) and not self.is_directory(normalized):
                raise NotDirectoryError(normalized)
            self._ensure_directory(segments)
            return

        parent = self._ensure_directory(segments[:-1])
        existing = parent.get(segments[-1])
        if isinstance(existing, DirectoryNode):
            raise IsDirectoryError(normalized)
        content = record.content or ""
        if existing is not None:
            existing.content = content
        else:
            parent.add(segments[-1], FileNode(content=content, max_history=self._max_history))
