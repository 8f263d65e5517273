"""Typed command payloads accepted by the file editing tools.

Agents send loosely typed argument records distinguished by ``command``. They
are validated into one of the variants below before anything touches the
file system, so a missing or mistyped field becomes a readable error.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator


class _Command(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    path: str = Field(min_length=1)


class ViewCommand(_Command):
    command: Literal["view"]
    view_range: list[int] | None = None

    @field_validator("view_range")
    @classmethod
    def _check_range_length(cls, value: list[int] | None) -> list[int] | None:
        if value is not None and len(value) != 2:
            raise ValueError("should be a list of two integers")
        return value


class CreateCommand(_Command):
    command: Literal["create"]
    file_text: str


class StrReplaceCommand(_Command):
    command: Literal["str_replace"]
    old_str: str
    new_str: str | None = None


class InsertCommand(_Command):
    command: Literal["insert"]
    insert_line: int
    new_str: str


class UndoEditCommand(_Command):
    command: Literal["undo_edit"]


class RenameCommand(_Command):
    command: Literal["rename"]
    new_path: str = Field(min_length=1)


class DeleteCommand(_Command):
    command: Literal["delete"]


StrReplaceEditorCommand = Annotated[
    ViewCommand | CreateCommand | StrReplaceCommand | InsertCommand | UndoEditCommand,
    Field(discriminator="command"),
]
FileManagerCommand = Annotated[RenameCommand | DeleteCommand, Field(discriminator="command")]

str_replace_editor_adapter: TypeAdapter[StrReplaceEditorCommand] = TypeAdapter(StrReplaceEditorCommand)
file_manager_adapter: TypeAdapter[FileManagerCommand] = TypeAdapter(FileManagerCommand)

_COMMAND_TAGS = {"view", "create", "str_replace", "insert", "undo_edit", "rename", "delete"}

# Alternative spellings some agents use for the same fields
ARGUMENT_ALIASES: dict[str, str] = {
    "old_string": "old_str",
    "new_string": "new_str",
}


def normalize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Drop ``None`` values, private keys and map alias spellings to canonical field names."""
    normalized: dict[str, object] = {}
    for key, value in arguments.items():
        if value is None or key.startswith("_"):
            continue
        normalized[ARGUMENT_ALIASES.get(key, key)] = value
    return normalized


def format_validation_error(error: ValidationError) -> str:
    """Render a pydantic validation error as a single line the agent can act on."""
    problems = []
    for detail in error.errors():
        # Drop the union tag pydantic puts first in the location
        location = [str(part) for part in detail["loc"] if part not in _COMMAND_TAGS]
        field = ".".join(location) or "arguments"
        problems.append(f"`{field}`: {detail['msg']}")
    return "Invalid arguments: " + "; ".join(problems)
