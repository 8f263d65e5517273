"""Tree node model of the virtual file system."""

from dataclasses import dataclass, field
from enum import Enum


class NodeType(str, Enum):
    """Discriminator of a file tree node, matching the serialized ``type`` field."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class FileNode:
    """A text file with its session-local edit history (oldest snapshot first)."""

    content: str = ""
    history: list[str] = field(default_factory=list)
    # Maximum number of snapshots kept; 0 or less keeps every snapshot
    max_history: int = 0

    @property
    def type(self) -> NodeType:
        return NodeType.FILE

    def push_history(self, snapshot: str) -> None:
        """Record ``snapshot`` as the most recent prior content, dropping the oldest past the cap."""
        self.history.append(snapshot)
        if self.max_history > 0 and len(self.history) > self.max_history:
            del self.history[: len(self.history) - self.max_history]

    def pop_history(self) -> str | None:
        """Remove and return the most recent snapshot, or ``None`` when there is none."""
        if not self.history:
            return None
        return self.history.pop()


@dataclass
class DirectoryNode:
    """A directory owning its children, keyed by name in insertion order."""

    children: dict[str, "Node"] = field(default_factory=dict)

    @property
    def type(self) -> NodeType:
        return NodeType.DIRECTORY

    def get(self, name: str) -> "Node | None":
        return self.children.get(name)

    def add(self, name: str, node: "Node") -> None:
        """Attach ``node`` under ``name``.

        Raises:
            KeyError: If a child with the same name already exists.
        """
        if name in self.children:
            raise KeyError(name)
        self.children[name] = node

    def remove(self, name: str) -> "Node":
        return self.children.pop(name)

    def entries(self) -> list[tuple[str, NodeType]]:
        """Return ``(name, type)`` pairs for the immediate children in display order."""
        return [(name, child.type) for name, child in self.children.items()]


Node = FileNode | DirectoryNode
