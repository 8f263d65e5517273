import json

from vfs_tools_mcp.tools.utils.constants import MAX_RESPONSE_LEN, TRUNCATED_MESSAGE
from vfs_tools_mcp.vfs.nodes import NodeType


def maybe_truncate(content: str, truncate_after: int | None = MAX_RESPONSE_LEN) -> str:
    """Truncate content and append a notice if content exceeds the specified length."""
    if not truncate_after or len(content) <= truncate_after:
        return content
    return content[:truncate_after] + TRUNCATED_MESSAGE


def make_output(
    file_content: str,
    file_descriptor: str,
    init_line: int = 1,
    truncate_after: int | None = MAX_RESPONSE_LEN,
) -> str:
    """Render file content the way `cat -n` does, numbering lines from ``init_line``."""
    file_content = maybe_truncate(file_content, truncate_after)
    file_content = "\n".join(
        [f"{i + init_line:6}\t{line}" for i, line in enumerate(file_content.split("\n"))]
    )
    return f"Here's the result of running `cat -n` on {file_descriptor}:\n" + file_content + "\n"


def format_directory_listing(path: str, entries: list[tuple[str, NodeType]]) -> str:
    """
    Format the immediate children of a directory as structured JSON for LLM consumption.

    Directories are suffixed with ``/`` so they stand out from files.
    """
    if not entries:
        return json.dumps(
            {"status": "empty", "path": path, "message": "Directory is empty", "entries": []},
            indent=2,
        )

    base = path.rstrip("/")
    items = []
    for name, node_type in entries:
        is_dir = node_type is NodeType.DIRECTORY
        items.append(
            {
                "name": f"{name}/" if is_dir else name,
                "type": node_type.value,
                "path": f"{base}/{name}",
            }
        )

    return json.dumps(
        {"status": "success", "path": path, "count": len(items), "entries": items},
        indent=2,
    )
