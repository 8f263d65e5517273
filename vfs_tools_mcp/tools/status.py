"""Short human-readable labels describing what a tool call is doing."""

from collections.abc import Mapping
from typing import Any

_STR_REPLACE_EDITOR_LABELS = {
    "create": "Creating",
    "str_replace": "Editing",
    "insert": "Editing",
    "view": "Viewing",
    "undo_edit": "Undoing edit on",
}

_FILE_MANAGER_LABELS = {
    "rename": "Renaming",
    "delete": "Deleting",
}

_LABELS_BY_TOOL = {
    "str_replace_editor": _STR_REPLACE_EDITOR_LABELS,
    "file_manager": _FILE_MANAGER_LABELS,
}


def get_tool_call_message(tool_name: str, args: Mapping[str, Any]) -> str:
    """
    Describe a tool call, e.g. ``Editing /App.jsx``.

    Falls back to the bare tool name when the tool or command is unknown or
    no path was given.
    """
    labels = _LABELS_BY_TOOL.get(tool_name)
    path = args.get("path")
    if labels is None or not isinstance(path, str) or not path:
        return tool_name

    command = args.get("command")
    label = labels.get(command) if isinstance(command, str) else None
    if label is None:
        return tool_name
    return f"{label} {path}"
