import logging
from collections.abc import Mapping

from vfs_tools_mcp.models.snapshot import FileSystemSnapshot
from vfs_tools_mcp.tools.base_vfs_tool import BaseVFSTool
from vfs_tools_mcp.turn import ChatTurn
from vfs_tools_mcp.utils.config import ServiceConfig
from vfs_tools_mcp.vfs.file_system import SerializedNodes

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages the active chat turn of every session."""

    def __init__(self, config: ServiceConfig, tools: Mapping[str, BaseVFSTool] | None = None) -> None:
        self._config = config
        self._tools = tools
        # Simple dict as an in-process turn storage.
        # Snapshots are handed back to the caller at turn end for persistence.
        self._turns: dict[str, ChatTurn] = {}

    def begin_turn(
        self, session_id: str = "default", files: SerializedNodes | FileSystemSnapshot | None = None
    ) -> ChatTurn:
        """Start a new turn for a session, discarding any turn left open."""
        turn = ChatTurn.from_snapshot(files, self._config, self._tools)
        previous = self._turns.pop(session_id, None)
        if previous is not None:
            logger.warning(f"Session {session_id} started a new turn before finishing the previous one")
            previous.abort()
        self._turns[session_id] = turn
        return turn

    def get_turn(self, session_id: str = "default") -> ChatTurn:
        """Return the open turn of a session.

        Raises:
            KeyError: If the session has no open turn.
        """
        if session_id not in self._turns:
            raise KeyError(f"No active turn for session '{session_id}'. Call begin_turn first.")
        return self._turns[session_id]

    def end_turn(self, session_id: str = "default") -> dict[str, dict[str, str]]:
        """Finish the open turn of a session and return its serialized snapshot."""
        turn = self.get_turn(session_id)
        del self._turns[session_id]
        return turn.finish()
