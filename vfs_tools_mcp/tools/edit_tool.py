# Copyright (c) 2023 Anthropic
# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates.
# SPDX-License-Identifier: MIT
#
# This file has been modified by ByteDance Ltd. and/or its affiliates. on 13 June 2025
#
# Original file was released under MIT License, with the full license text
# available at https://github.com/anthropics/anthropic-quickstarts/blob/main/LICENSE
#
# This modified file is released under the same license.

import logging
from typing import Any

from pydantic import BaseModel, TypeAdapter
from typing_extensions import override

from vfs_tools_mcp.models.commands import (
    CreateCommand,
    InsertCommand,
    StrReplaceCommand,
    UndoEditCommand,
    ViewCommand,
    str_replace_editor_adapter,
)
from vfs_tools_mcp.tools.base import ToolError, ToolExecResult, ToolParameter
from vfs_tools_mcp.tools.base_vfs_tool import BaseVFSTool
from vfs_tools_mcp.tools.utils.constants import CREATE_PREVIEW_LEN, STR_REPLACE_EDITOR_COMMANDS
from vfs_tools_mcp.tools.utils.formatting_utils import format_directory_listing, make_output
from vfs_tools_mcp.vfs.edit_engine import EditEngine
from vfs_tools_mcp.vfs.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)


class StrReplaceEditorTool(BaseVFSTool):
    """Tool to view, create and edit files of the virtual file system."""

    @override
    def get_name(self) -> str:
        return "str_replace_editor"

    @override
    def get_description(self) -> str:
        return """Custom editing tool for viewing, creating and editing files in the virtual file system
* State is persistent across command calls within the current turn
* If `path` is a file, `view` displays the result of applying `cat -n`. If `path` is a directory, `view` lists its immediate children
* The `create` command cannot be used if the specified `path` already exists! Edit the existing file instead, or delete it first with the `file_manager` tool
* If a `command` generates a long output, it will be truncated and marked with `<response clipped>`
* The `undo_edit` command will revert the last edit made to the file at `path`

Notes for using the `str_replace` command:
* The `old_str` parameter should match EXACTLY one or more consecutive lines from the original file. Be mindful of whitespaces!
* If the `old_str` parameter is not unique in the file, the replacement will not be performed. Make sure to include enough context in `old_str` to make it unique
* The `new_str` parameter should contain the edited lines that should replace the `old_str`
"""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        """Get the parameters for the str_replace_editor tool."""
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The commands to run. Allowed options are: {', '.join(STR_REPLACE_EDITOR_COMMANDS)}.",
                required=True,
                enum=STR_REPLACE_EDITOR_COMMANDS,
            ),
            ToolParameter(
                name="file_text",
                type="string",
                description="Required parameter of `create` command, with the content of the file to be created.",
            ),
            ToolParameter(
                name="insert_line",
                type="integer",
                description="Required parameter of `insert` command. The `new_str` will be inserted as new line(s) before the zero-based line `insert_line`; use the number of lines in the file to append at the end.",
            ),
            ToolParameter(
                name="new_str",
                type="string",
                description="Optional parameter of `str_replace` command containing the new string (if not given, no string will be added). Required parameter of `insert` command containing the string to insert.",
            ),
            ToolParameter(
                name="old_str",
                type="string",
                description="Required parameter of `str_replace` command containing the string in `path` to replace.",
            ),
            ToolParameter(
                name="path",
                type="string",
                description="Absolute path to file or directory, e.g. '/App.jsx' or '/components/Button.jsx'.",
                required=True,
            ),
            ToolParameter(
                name="view_range",
                type="array",
                description="Optional parameter of `view` command when `path` points to a file. If none is given, the full file is shown. If provided, the file will be shown in the indicated line number range, e.g. [11, 12] will show lines 11 and 12. Indexing at 1 to start. Setting `[start_line, -1]` shows all lines from `start_line` to the end of the file.",
                items={"type": "integer"},
            ),
        ]

    @override
    def get_commands(self) -> list[str]:
        return STR_REPLACE_EDITOR_COMMANDS

    @override
    def get_command_adapter(self) -> TypeAdapter[Any]:
        return str_replace_editor_adapter

    @override
    async def _execute_operation(self, command: BaseModel, vfs: VirtualFileSystem) -> ToolExecResult:
        """Execute the text editor operation."""
        engine = EditEngine(vfs)
        match command:
            case ViewCommand():
                logger.debug("Calling _view")
                return self._view(engine, command)
            case CreateCommand():
                logger.debug("Calling _create")
                return self._create(engine, command)
            case StrReplaceCommand():
                logger.debug("Calling _str_replace")
                return self._str_replace(engine, command)
            case InsertCommand():
                logger.debug("Calling _insert")
                return self._insert(engine, command)
            case UndoEditCommand():
                logger.debug("Calling _undo_edit")
                return self._undo_edit(engine, command)
            case _:
                raise ToolError(f"Unsupported command model {type(command).__name__}")

    def _view(self, engine: EditEngine, command: ViewCommand) -> ToolExecResult:
        """Implement the view command"""
        result = engine.view(command.path, command.view_range)
        if result.is_directory:
            listing = format_directory_listing(result.path, result.entries or [])
            return ToolExecResult(output=f"Here's the content of the directory {result.path}:\n{listing}\n")

        if not result.content:
            return ToolExecResult(output=f"The file {result.path} is empty.")
        return ToolExecResult(
            output=make_output(result.content, result.path, result.init_line, self._max_response_len)
        )

    def _create(self, engine: EditEngine, command: CreateCommand) -> ToolExecResult:
        result = engine.create(command.path, command.file_text)
        logger.debug(f"File created successfully at {result.path}")

        output_msg = f"File created successfully at: {result.path}"
        preview = result.content
        if len(preview) > CREATE_PREVIEW_LEN:
            preview = preview[:CREATE_PREVIEW_LEN] + "\n... [truncated]"
        output_msg += f"\n\nFile content:\n```\n{preview}\n```"
        return ToolExecResult(output=output_msg)

    def _str_replace(self, engine: EditEngine, command: StrReplaceCommand) -> ToolExecResult:
        """Implement the str_replace command, which replaces old_str with new_str in the file content"""
        logger.debug(
            f"str_replace called with path={command.path}, old_str length={len(command.old_str)}, "
            f"new_str length={len(command.new_str) if command.new_str else 0}"
        )
        result = engine.str_replace(command.path, command.old_str, command.new_str)

        success_msg = f"The file {result.path} has been edited. "
        success_msg += make_output(
            result.snippet, f"a snippet of {result.path}", result.snippet_start_line, self._max_response_len
        )
        success_msg += "Review the changes and make sure they are as expected. Edit the file again if necessary."
        return ToolExecResult(output=success_msg)

    def _insert(self, engine: EditEngine, command: InsertCommand) -> ToolExecResult:
        """Implement the insert command, which inserts new_str at the specified line in the file content."""
        result = engine.insert(command.path, command.insert_line, command.new_str)

        success_msg = f"The file {result.path} has been edited. "
        success_msg += make_output(
            result.snippet, "a snippet of the edited file", result.snippet_start_line, self._max_response_len
        )
        success_msg += "Review the changes and make sure they are as expected (correct indentation, no duplicate lines, etc). Edit the file again if necessary."
        return ToolExecResult(output=success_msg)

    def _undo_edit(self, engine: EditEngine, command: UndoEditCommand) -> ToolExecResult:
        """Implement the undo_edit command."""
        result = engine.undo_edit(command.path)
        return ToolExecResult(
            output=f"Last edit to {result.path} undone successfully. "
            + make_output(result.content, result.path, truncate_after=self._max_response_len)
        )
