"""
MCP server definition for the VFS Tools MCP.
"""

import logging
from typing import Any, List, Optional

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from vfs_tools_mcp.prompts import get_generation_prompt
from vfs_tools_mcp.tools.base import ToolExecResult
from vfs_tools_mcp.utils.config import ServiceConfig
from vfs_tools_mcp.utils.dependencies import get_base_config, get_session_manager


# Get a module-level logger
logger = logging.getLogger(__name__)


class CustomFastMCP(FastMCP):
    """Custom FastMCP server with CORS middleware."""

    def _add_cors_middleware(self, app: Starlette) -> Starlette:
        """A helper to add CORS middleware to a Starlette app."""
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=".*",  # Allow any origin
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        """Overrides the default sse_app to inject CORS middleware."""
        app = super().sse_app(mount_path)
        return self._add_cors_middleware(app)

    def streamable_http_app(self) -> Starlette:
        """Overrides the default streamable_http_app to inject CORS middleware."""
        app = super().streamable_http_app()
        return self._add_cors_middleware(app)


def build_server(config: ServiceConfig) -> CustomFastMCP:
    """Build and configure the FastMCP server instance.

    Args:
        config: The server's service configuration.

    Returns:
        A configured CustomFastMCP instance.
    """
    logger.info(
        "Initializing FastMCP server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return CustomFastMCP(
        "vfs-tools-mcp",
        host=config.MCP_HOST,
        port=config.MCP_PORT,
    )


def _to_response(result: ToolExecResult) -> dict[str, Any]:
    """Convert a tool result into the status dict returned to MCP clients."""
    if result.error:
        return {"status": "error", "error": result.error, "exit_code": result.error_code}
    return {"status": "success", "result": result.output, "exit_code": result.error_code}


# Get the base configuration for server initialization.
# This is also imported by main.py to run the server.
server_config = get_base_config()
mcp_app = build_server(server_config)


# --- Prompt Handlers ---
@mcp_app.prompt(title="Code Generation System Prompt")
def generation() -> str:
    """Provides the system prompt for a code generation turn."""
    return get_generation_prompt()


# --- Turn Lifecycle ---

@mcp_app.tool()
async def begin_turn(
    context: Context,
    session_id: str = "default",
    files: Optional[dict[str, dict[str, Any]]] = None,
) -> dict[str, Any]:
    """
    Starts a chat turn by loading the latest serialized file system snapshot.

    Args:
        session_id: Identifier of the conversation the turn belongs to.
        files: Mapping of absolute path to {"type": "file" | "directory", "content"?: str}. Empty when omitted.

    Returns:
        A dictionary describing the loaded file system.
    """
    logger.info(f"Beginning turn for session '{session_id}'")
    try:
        turn = get_session_manager().begin_turn(session_id, files)
        return {
            "status": "success",
            "result": f"Loaded {turn.vfs.file_count()} files.",
            "exit_code": 0,
        }
    except Exception as e:
        logger.error(f"Error beginning turn: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": -1}


@mcp_app.tool()
async def end_turn(
    context: Context,
    session_id: str = "default",
) -> dict[str, Any]:
    """
    Finishes the current chat turn and returns the serialized file system for persistence.

    Args:
        session_id: Identifier of the conversation the turn belongs to.

    Returns:
        A dictionary containing the snapshot under `files`.
    """
    logger.info(f"Ending turn for session '{session_id}'")
    try:
        files = get_session_manager().end_turn(session_id)
        return {"status": "success", "files": files, "exit_code": 0}
    except Exception as e:
        logger.error(f"Error ending turn: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": -1}


# --- Tool Definitions ---

@mcp_app.tool(name="str_replace_editor")
async def str_replace_editor_tool(
    context: Context,
    command: str,
    path: str,
    session_id: str = "default",
    file_text: Optional[str] = None,
    old_str: Optional[str] = None,
    new_str: Optional[str] = None,
    insert_line: Optional[int] = None,
    view_range: Optional[List[int]] = None,
) -> dict[str, Any]:
    """
    A tool for viewing, creating and editing files of the virtual file system (view, create, str_replace, insert, undo_edit).

    Args:
        command: The type of operation. Can be 'view', 'create', 'str_replace', 'insert' or 'undo_edit'.
        path: The absolute path to the file or directory.
        session_id: Identifier of the conversation whose turn is edited.
        file_text: The content for a 'create' operation.
        old_str: The string to search for in a 'str_replace' operation. Must be unique.
        new_str: The replacement string for 'str_replace' or the content for 'insert'.
        insert_line: The zero-based line index for an 'insert' operation (inserts BEFORE this line).
        view_range: The line range to view (e.g., [10, 25]).

    Returns:
        A dictionary containing the result of the operation.
    """
    logger.info(f"Executing str_replace_editor command '{command}' on path '{path}'")
    try:
        turn = get_session_manager().get_turn(session_id)
        args = {
            "command": command,
            "path": path,
            "file_text": file_text,
            "old_str": old_str,
            "new_str": new_str,
            "insert_line": insert_line,
            "view_range": view_range,
        }
        # Filter out None values so we don't pass them to the tool
        args = {k: v for k, v in args.items() if v is not None}

        result = await turn.call_tool("str_replace_editor", args)
        return _to_response(result)

    except Exception as e:
        logger.error(f"Error executing str_replace_editor command: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": -1}


@mcp_app.tool(name="file_manager")
async def file_manager_tool(
    context: Context,
    command: str,
    path: str,
    session_id: str = "default",
    new_path: Optional[str] = None,
) -> dict[str, Any]:
    """
    Renames or deletes files and folders of the virtual file system.

    Args:
        command: The operation to perform. Can be 'rename' or 'delete'.
        path: The absolute path of the file or folder.
        session_id: Identifier of the conversation whose turn is edited.
        new_path: For 'rename'. The new absolute path.

    Returns:
        A dictionary containing the result of the operation, plus `success`
        and `message` or `error`.
    """
    logger.info(f"Executing file_manager command '{command}' on path '{path}'")
    try:
        turn = get_session_manager().get_turn(session_id)
        args = {"command": command, "path": path, "new_path": new_path}
        args = {k: v for k, v in args.items() if v is not None}

        result = await turn.call_tool("file_manager", args)
        return {**_to_response(result), **result.as_dict()}

    except Exception as e:
        logger.error(f"Error executing file_manager command: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": -1}
