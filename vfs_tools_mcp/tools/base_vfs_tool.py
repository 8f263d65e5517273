# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Base class for tools operating on the virtual file system of a turn."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from typing_extensions import override

from vfs_tools_mcp.models.commands import format_validation_error, normalize_arguments
from vfs_tools_mcp.tools.base import Tool, ToolCallArguments, ToolError, ToolExecResult
from vfs_tools_mcp.tools.utils.constants import MAX_RESPONSE_LEN
from vfs_tools_mcp.vfs.errors import VFSError
from vfs_tools_mcp.vfs.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)

# Reserved argument key under which the orchestrator injects the turn's file system
VFS_ARGUMENT = "_vfs"


class BaseVFSTool(Tool, ABC):
    """Base class for virtual file system tools with common functionality."""

    def __init__(self, max_response_len: int = MAX_RESPONSE_LEN) -> None:
        self._max_response_len = max_response_len

    @abstractmethod
    def get_commands(self) -> list[str]:
        """Names of the commands this tool accepts."""

    @abstractmethod
    def get_command_adapter(self) -> TypeAdapter[Any]:
        """Adapter validating raw arguments into one of the tool's command models."""

    def _validate_vfs(self, arguments: ToolCallArguments) -> VirtualFileSystem:
        """
        Validate and extract the VirtualFileSystem from arguments.

        Args:
            arguments: The tool call arguments

        Returns:
            The file system of the current turn

        Raises:
            ToolError: If no file system was injected
        """
        vfs = arguments.get(VFS_ARGUMENT)
        if not isinstance(vfs, VirtualFileSystem):
            logger.error("VirtualFileSystem not found in arguments")
            raise ToolError("VirtualFileSystem not found in arguments. This is an internal server error.")
        return vfs

    def _parse_command(self, arguments: ToolCallArguments) -> BaseModel:
        """
        Validate the raw arguments into a typed command.

        Raises:
            ToolError: If the command is unknown.
            ValidationError: If a field required by the command is missing or mistyped.
        """
        command = arguments.get("command")
        if command not in self.get_commands():
            raise ToolError(
                f"Unrecognized command {command}. The allowed commands for the {self.get_name()} tool are: {', '.join(self.get_commands())}"
            )
        return self.get_command_adapter().validate_python(normalize_arguments(arguments))

    @abstractmethod
    async def _execute_operation(self, command: BaseModel, vfs: VirtualFileSystem) -> ToolExecResult:
        """
        Execute the specific operation for this tool.

        Args:
            command: The validated command
            vfs: The file system of the current turn

        Returns:
            The result of the operation
        """
        pass

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        """
        Execute the tool with common validation and error handling.

        Failures never propagate: they are turned into an error result the
        agent can read and react to.

        Args:
            arguments: The tool call arguments

        Returns:
            The result of the tool execution
        """
        try:
            vfs = self._validate_vfs(arguments)
            command = self._parse_command(arguments)
            logger.debug(f"Executing {self.get_name()} command {command!r}")
            return await self._execute_operation(command, vfs)

        except VFSError as e:
            logger.debug(f"{e.kind} in {self.get_name()}: {e}")
            return ToolExecResult(error=str(e), error_code=-1)
        except ToolError as e:
            logger.debug(f"Tool error in {self.get_name()}: {e}")
            return ToolExecResult(error=e.message, error_code=-1)
        except ValidationError as e:
            logger.debug(f"Invalid arguments for {self.get_name()}: {e}")
            return ToolExecResult(error=format_validation_error(e), error_code=-1)
        except Exception as e:
            logger.exception(f"Unexpected error in {self.get_name()}: {e}")
            return ToolExecResult(error=f"Unexpected error: {str(e)}", error_code=-1)
