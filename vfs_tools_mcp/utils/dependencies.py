"""
Configuration and dependency management for the VFS Tools MCP server.
"""

import logging
from functools import lru_cache

from vfs_tools_mcp.utils.config import ServiceConfig

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables and .env files, which improves performance.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


# --- Providers ---
# Tools are stateless; the file system they act on is injected per call by
# the turn, so a single instance of each can be shared.

from ..tools.edit_tool import StrReplaceEditorTool
from ..tools.file_manager_tool import FileManagerTool
from .session_manager import SessionManager


@lru_cache
def get_str_replace_editor_tool_provider() -> StrReplaceEditorTool:
    """Returns a cached instance of the StrReplaceEditorTool."""
    logger.info("Initializing StrReplaceEditorTool singleton.")
    return StrReplaceEditorTool(max_response_len=get_base_config().MAX_RESPONSE_LEN)


@lru_cache
def get_file_manager_tool_provider() -> FileManagerTool:
    """Returns a cached instance of the FileManagerTool."""
    logger.info("Initializing FileManagerTool singleton.")
    return FileManagerTool(max_response_len=get_base_config().MAX_RESPONSE_LEN)


@lru_cache
def get_session_manager() -> SessionManager:
    """Returns a singleton instance of the SessionManager."""
    logger.info("Initializing SessionManager singleton.")
    tools = [get_str_replace_editor_tool_provider(), get_file_manager_tool_provider()]
    return SessionManager(get_base_config(), tools={tool.get_name(): tool for tool in tools})
