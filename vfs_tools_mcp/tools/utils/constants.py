# Output limits for tool responses
MAX_RESPONSE_LEN: int = 16000
CREATE_PREVIEW_LEN: int = 1000

TRUNCATED_MESSAGE: str = (
    "<response clipped><NOTE>To save on context only part of this file has been shown to you. "
    "Use the `view` command with a `view_range` to see the rest of the file.</NOTE>"
)

STR_REPLACE_EDITOR_COMMANDS = ["view", "create", "str_replace", "insert", "undo_edit"]
FILE_MANAGER_COMMANDS = ["rename", "delete"]
