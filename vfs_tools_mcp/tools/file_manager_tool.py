import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter
from typing_extensions import override

from vfs_tools_mcp.models.commands import DeleteCommand, RenameCommand, file_manager_adapter
from vfs_tools_mcp.tools.base import ToolError, ToolExecResult, ToolParameter
from vfs_tools_mcp.tools.base_vfs_tool import BaseVFSTool
from vfs_tools_mcp.tools.utils.constants import FILE_MANAGER_COMMANDS
from vfs_tools_mcp.vfs.file_system import VirtualFileSystem
from vfs_tools_mcp.vfs.path_utils import normalize_path

logger = logging.getLogger(__name__)


class FileManagerTool(BaseVFSTool):
    """
    Tool for moving and removing nodes of the virtual file system.
    Renaming moves the whole subtree and creates missing parent directories.
    Deleting a directory removes everything below it.
    """

    @override
    def get_name(self) -> str:
        return "file_manager"

    @override
    def get_description(self) -> str:
        return """Rename or delete files and folders in the virtual file system.
- `rename`: Moves the file or folder at `path` to `new_path`. Parent folders of `new_path` are created as needed. Fails if `new_path` already exists.
- `delete`: Deletes the file or folder at `path`. Folders are deleted together with their contents."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The operation to perform. Allowed options are: {', '.join(FILE_MANAGER_COMMANDS)}.",
                required=True,
                enum=FILE_MANAGER_COMMANDS,
            ),
            ToolParameter(
                name="path",
                type="string",
                description="The absolute path of the file or folder to rename or delete.",
                required=True,
            ),
            ToolParameter(
                name="new_path",
                type="string",
                description="Required parameter of `rename` command. The new absolute path.",
                required=False,
            ),
        ]

    @override
    def get_commands(self) -> list[str]:
        return FILE_MANAGER_COMMANDS

    @override
    def get_command_adapter(self) -> TypeAdapter[Any]:
        return file_manager_adapter

    @override
    async def _execute_operation(self, command: BaseModel, vfs: VirtualFileSystem) -> ToolExecResult:
        match command:
            case RenameCommand():
                return self._rename_handler(vfs, command)
            case DeleteCommand():
                return self._delete_handler(vfs, command)
            case _:
                raise ToolError(f"Unsupported command model {type(command).__name__}")

    def _rename_handler(self, vfs: VirtualFileSystem, command: RenameCommand) -> ToolExecResult:
        vfs.rename(command.path, command.new_path)
        old_path, new_path = normalize_path(command.path), normalize_path(command.new_path)
        logger.debug(f"Renamed {old_path} to {new_path}")
        return ToolExecResult(output=f"Successfully renamed {old_path} to {new_path}")

    def _delete_handler(self, vfs: VirtualFileSystem, command: DeleteCommand) -> ToolExecResult:
        vfs.delete(command.path)
        path = normalize_path(command.path)
        logger.debug(f"Deleted {path}")
        return ToolExecResult(output=f"Successfully deleted {path}")
