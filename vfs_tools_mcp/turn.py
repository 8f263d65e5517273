"""
Orchestration of one chat turn against the virtual file system.

A turn rebuilds the file system from the latest serialized snapshot, lets the
agent apply a bounded sequence of tool calls, and serializes the tree once at
the end for persistence. Aborting a turn discards every edit made during it.
"""

import logging
from collections.abc import Mapping
from typing import Any

from vfs_tools_mcp.models.session import ToolCallRecord, TurnStatus
from vfs_tools_mcp.models.snapshot import FileSystemSnapshot
from vfs_tools_mcp.tools.base import ToolExecResult
from vfs_tools_mcp.tools.base_vfs_tool import VFS_ARGUMENT, BaseVFSTool
from vfs_tools_mcp.tools.edit_tool import StrReplaceEditorTool
from vfs_tools_mcp.tools.file_manager_tool import FileManagerTool
from vfs_tools_mcp.tools.status import get_tool_call_message
from vfs_tools_mcp.utils.config import ServiceConfig
from vfs_tools_mcp.vfs.file_system import SerializedNodes, VirtualFileSystem

logger = logging.getLogger(__name__)


class TurnClosedError(RuntimeError):
    """Raised when a finished or aborted turn is used again."""


def build_tools(config: ServiceConfig) -> dict[str, BaseVFSTool]:
    """Instantiate the tools exposed to the agent, keyed by tool name."""
    tools: list[BaseVFSTool] = [
        StrReplaceEditorTool(max_response_len=config.MAX_RESPONSE_LEN),
        FileManagerTool(max_response_len=config.MAX_RESPONSE_LEN),
    ]
    return {tool.get_name(): tool for tool in tools}


class ChatTurn:
    """A single request/response cycle owning one VirtualFileSystem."""

    def __init__(
        self,
        vfs: VirtualFileSystem,
        config: ServiceConfig,
        tools: Mapping[str, BaseVFSTool] | None = None,
    ) -> None:
        self.vfs = vfs
        self.config = config
        self._tools = dict(tools) if tools is not None else build_tools(config)
        self.records: list[ToolCallRecord] = []
        self.status = TurnStatus.ACTIVE

    @classmethod
    def from_snapshot(
        cls,
        files: SerializedNodes | FileSystemSnapshot | None,
        config: ServiceConfig,
        tools: Mapping[str, BaseVFSTool] | None = None,
    ) -> "ChatTurn":
        """Start a turn from the latest serialized snapshot, or from an empty tree."""
        vfs = VirtualFileSystem.from_snapshot(files, max_history=config.VFS_MAX_HISTORY)
        logger.info(f"Starting turn with {vfs.file_count()} files")
        return cls(vfs, config, tools)

    @property
    def steps(self) -> int:
        return len(self.records)

    def tools(self) -> dict[str, BaseVFSTool]:
        return dict(self._tools)

    def tool_definitions(self) -> list[dict[str, object]]:
        """JSON definitions of the tools, ready to hand to a language model provider."""
        return [tool.json_definition() for tool in self._tools.values()]

    def _ensure_active(self) -> None:
        if self.status is not TurnStatus.ACTIVE:
            raise TurnClosedError(f"The turn is already {self.status.value}.")

    async def call_tool(self, tool_name: str, arguments: Mapping[str, Any]) -> ToolExecResult:
        """
        Apply one tool call to the turn's file system.

        Tool failures, unknown tools and calls past the step limit come back
        as error results so the agent can read them.

        Raises:
            TurnClosedError: If the turn was already finished or aborted.
        """
        self._ensure_active()
        public_arguments = {k: v for k, v in arguments.items() if not k.startswith("_")}

        if self.steps >= self.config.MAX_TOOL_STEPS:
            logger.warning(f"Tool call {tool_name} rejected: step limit of {self.config.MAX_TOOL_STEPS} reached")
            return ToolExecResult(
                error=f"Step limit of {self.config.MAX_TOOL_STEPS} tool calls reached for this turn.",
                error_code=-1,
            )

        tool = self._tools.get(tool_name)
        if tool is None:
            result = ToolExecResult(
                error=f"Unknown tool {tool_name}. Available tools are: {', '.join(self._tools)}",
                error_code=-1,
            )
        else:
            result = await tool.execute({**public_arguments, VFS_ARGUMENT: self.vfs})

        self.records.append(
            ToolCallRecord(
                tool_name=tool_name,
                arguments=public_arguments,
                status_message=get_tool_call_message(tool_name, public_arguments),
                output=result.output,
                error=result.error,
            )
        )
        logger.debug(f"Step {self.steps}: {self.records[-1].status_message} -> {'ok' if result.success else 'error'}")
        return result

    def finish(self) -> dict[str, dict[str, str]]:
        """Serialize the file system for persistence and close the turn."""
        self._ensure_active()
        snapshot = self.vfs.serialize()
        self.status = TurnStatus.FINISHED
        logger.info(f"Finished turn after {self.steps} tool calls with {len(snapshot)} nodes")
        return snapshot

    def abort(self) -> None:
        """Close the turn without serializing; its edits are lost."""
        self._ensure_active()
        self.status = TurnStatus.ABORTED
        logger.info(f"Aborted turn after {self.steps} tool calls, discarding edits")


async def apply_tool_call(
    vfs: VirtualFileSystem,
    tool_name: str,
    arguments: Mapping[str, Any],
    tools: Mapping[str, BaseVFSTool] | None = None,
) -> ToolExecResult:
    """
    Replay a recorded tool call on another file system instance.

    Used to keep a client-side copy of the tree in step with the edits the
    agent made on the server.
    """
    tools = tools if tools is not None else build_tools(ServiceConfig())
    tool = tools.get(tool_name)
    if tool is None:
        return ToolExecResult(error=f"Unknown tool {tool_name}.", error_code=-1)
    return await tool.execute({**arguments, VFS_ARGUMENT: vfs})
