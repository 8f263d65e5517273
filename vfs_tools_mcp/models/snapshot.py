from typing import Literal

from pydantic import BaseModel, RootModel


class SerializedNode(BaseModel):
    """Persisted description of a single file tree node."""

    type: Literal["file", "directory"]
    content: str | None = None


class FileSystemSnapshot(RootModel[dict[str, SerializedNode]]):
    """A flat mapping from absolute path to node description."""

    def to_nodes(self) -> dict[str, dict[str, str]]:
        """Return the plain-dict form exchanged with the persistence layer."""
        return {path: node.model_dump(exclude_none=True) for path, node in self.root.items()}
