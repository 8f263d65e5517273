from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TurnStatus(str, Enum):
    """Lifecycle of a single chat turn."""

    ACTIVE = "active"
    FINISHED = "finished"
    ABORTED = "aborted"


class ToolCallRecord(BaseModel):
    """One tool call applied during a turn, kept for display and client replay."""

    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    status_message: str
    output: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
