"""Base classes shared by every agent-invocable tool."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

ParamSchemaValue = str | list[str] | bool | dict[str, object]
Property = dict[str, ParamSchemaValue]
ToolCallArguments = dict[str, Any]


class ToolError(Exception):
    """Base class for tool errors surfaced to the agent as text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


@dataclass
class ToolExecResult:
    """Intermediate result of a tool execution."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0

    @property
    def success(self) -> bool:
        return self.error is None

    def as_dict(self) -> dict[str, Any]:
        """Structured payload for callers that prefer a dict over plain text."""
        if self.error is not None:
            return {"success": False, "error": self.error}
        return {"success": True, "message": self.output or ""}


@dataclass
class ToolParameter:
    """A single parameter of a tool, rendered into its JSON schema."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    items: dict[str, object] | None = None
    required: bool = False


class Tool(ABC):
    """Base class for all tools."""

    @property
    def name(self) -> str:
        return self.get_name()

    @property
    def description(self) -> str:
        return self.get_description()

    @property
    def parameters(self) -> list[ToolParameter]:
        return self.get_parameters()

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        pass

    def json_definition(self) -> dict[str, object]:
        """Get the JSON definition of the tool."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.get_input_schema(),
        }

    def get_input_schema(self) -> dict[str, object]:
        """Get the input schema of the tool."""
        schema: dict[str, object] = {
            "type": "object",
        }

        properties: dict[str, Property] = {}
        required: list[str] = []

        for param in self.parameters:
            param_schema: Property = {
                "type": param.type,
                "description": param.description,
            }
            if param.enum:
                param_schema["enum"] = param.enum
            if param.items:
                param_schema["items"] = param.items

            properties[param.name] = param_schema
            if param.required:
                required.append(param.name)

        schema["properties"] = properties
        if required:
            schema["required"] = required

        return schema
