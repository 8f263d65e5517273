"""Text editing primitives layered on top of :class:`VirtualFileSystem`."""

import logging
from dataclasses import dataclass

from vfs_tools_mcp.vfs.errors import (
    AlreadyExistsError,
    AmbiguousMatchError,
    InvalidLineNumberError,
    InvalidViewRangeError,
    NoHistoryError,
    NoMatchError,
)
from vfs_tools_mcp.vfs.file_system import VirtualFileSystem
from vfs_tools_mcp.vfs.nodes import NodeType
from vfs_tools_mcp.vfs.path_utils import normalize_path

logger = logging.getLogger(__name__)

SNIPPET_LINES: int = 4


@dataclass
class ViewResult:
    """What ``view`` found at a path: file content or a directory listing."""

    path: str
    content: str | None = None
    init_line: int = 1
    entries: list[tuple[str, NodeType]] | None = None

    @property
    def is_directory(self) -> bool:
        return self.entries is not None


@dataclass
class EditResult:
    """The outcome of a mutating edit, with a snippet of the affected region."""

    path: str
    content: str
    snippet: str
    snippet_start_line: int = 1


def _split_lines(content: str) -> list[str]:
    # An empty file has no lines, so inserting into it yields just the new text
    return content.split("\n") if content else []


class EditEngine:
    """
    Implements the editing commands an agent can issue against a file system.

    Every command either applies fully or raises a ``VFSError`` subclass
    without touching the tree.
    """

    def __init__(self, vfs: VirtualFileSystem) -> None:
        self.vfs = vfs

    def view(self, path: str, view_range: list[int] | None = None) -> ViewResult:
        """
        Return the content of a file, optionally limited to a line range.

        ``view_range`` is 1-based and inclusive; ``[start, -1]`` reads to the
        end of the file. For a directory the immediate children are returned.
        """
        normalized = normalize_path(path)
        if self.vfs.is_directory(normalized):
            if view_range:
                raise InvalidViewRangeError(
                    "The `view_range` parameter is not allowed when `path` points to a directory.",
                    normalized,
                )
            return ViewResult(path=normalized, entries=self.vfs.list(normalized))

        file_content = self.vfs.read(normalized)
        if not view_range:
            return ViewResult(path=normalized, content=file_content)

        if len(view_range) != 2:
            raise InvalidViewRangeError("Invalid `view_range`. It should be a list of two integers.", normalized)
        file_lines = file_content.split("\n")
        n_lines_file = len(file_lines)
        init_line, final_line = view_range
        if init_line < 1 or init_line > n_lines_file:
            raise InvalidViewRangeError(
                f"Invalid `view_range`: {view_range}. Its first element `{init_line}` should be within the range of lines of the file: {[1, n_lines_file]}",
                normalized,
            )
        if final_line > n_lines_file:
            raise InvalidViewRangeError(
                f"Invalid `view_range`: {view_range}. Its second element `{final_line}` should be smaller than the number of lines in the file: `{n_lines_file}`",
                normalized,
            )
        if final_line != -1 and final_line < init_line:
            raise InvalidViewRangeError(
                f"Invalid `view_range`: {view_range}. Its second element `{final_line}` should be larger or equal than its first `{init_line}`",
                normalized,
            )

        if final_line == -1:
            sliced = "\n".join(file_lines[init_line - 1 :])
        else:
            sliced = "\n".join(file_lines[init_line - 1 : final_line])
        return ViewResult(path=normalized, content=sliced, init_line=init_line)

    def create(self, path: str, file_text: str) -> EditResult:
        """Create a new file. Unlike ``write``, an existing node is never overwritten."""
        normalized = normalize_path(path)
        if self.vfs.exists(normalized):
            raise AlreadyExistsError(normalized)
        self.vfs.write(normalized, file_text)
        logger.debug(f"Created {normalized} with {len(file_text)} characters")
        return EditResult(path=normalized, content=file_text, snippet=file_text)

    def str_replace(self, path: str, old_str: str, new_str: str | None = None) -> EditResult:
        """
        Replace the single occurrence of ``old_str`` with ``new_str``.

        Omitting ``new_str`` deletes ``old_str``.

        Raises:
            NoMatchError: If ``old_str`` is empty or does not appear verbatim.
            AmbiguousMatchError: If ``old_str`` appears more than once.
        """
        normalized = normalize_path(path)
        file_content = self.vfs.read(normalized)
        new_str = new_str or ""

        lines = self._occurrence_lines(file_content, old_str) if old_str else []
        logger.debug(f"Found {len(lines)} occurrences of old_str in {normalized}")
        if not lines:
            raise NoMatchError(
                f"No replacement was performed, old_str `{old_str}` did not appear verbatim in {normalized}.",
                normalized,
            )
        if len(lines) > 1:
            raise AmbiguousMatchError(
                f"No replacement was performed. Multiple occurrences of old_str `{old_str}` in lines {lines} in {normalized}. Please ensure it is unique",
                normalized,
                lines,
            )

        new_file_content = file_content.replace(old_str, new_str, 1)
        self.vfs.write(normalized, new_file_content)

        replacement_line = file_content.split(old_str)[0].count("\n")
        start_line = max(0, replacement_line - SNIPPET_LINES)
        end_line = replacement_line + SNIPPET_LINES + new_str.count("\n")
        snippet = "\n".join(new_file_content.split("\n")[start_line : end_line + 1])
        return EditResult(
            path=normalized,
            content=new_file_content,
            snippet=snippet,
            snippet_start_line=start_line + 1,
        )

    @staticmethod
    def _occurrence_lines(content: str, needle: str) -> list[int]:
        """1-based line numbers at which each occurrence of ``needle`` starts."""
        lines = []
        position = content.find(needle)
        while position != -1:
            lines.append(content.count("\n", 0, position) + 1)
            position = content.find(needle, position + 1)
        return lines

    def insert(self, path: str, insert_line: int, new_str: str) -> EditResult:
        """
        Insert ``new_str`` as new line(s) before the zero-based line ``insert_line``.

        An ``insert_line`` equal to the line count appends at the end of the file.

        Raises:
            InvalidLineNumberError: If ``insert_line`` is negative or past the line count.
        """
        normalized = normalize_path(path)
        file_text_lines = _split_lines(self.vfs.read(normalized))
        n_lines_file = len(file_text_lines)

        if insert_line < 0 or insert_line > n_lines_file:
            raise InvalidLineNumberError(
                f"Invalid `insert_line` parameter: {insert_line}. It should be within the range of lines of the file: {[0, n_lines_file]}",
                normalized,
            )

        new_str_lines = new_str.split("\n")
        new_file_text = "\n".join(
            file_text_lines[:insert_line] + new_str_lines + file_text_lines[insert_line:]
        )
        snippet_lines = (
            file_text_lines[max(0, insert_line - SNIPPET_LINES) : insert_line]
            + new_str_lines
            + file_text_lines[insert_line : insert_line + SNIPPET_LINES]
        )
        self.vfs.write(normalized, new_file_text)
        return EditResult(
            path=normalized,
            content=new_file_text,
            snippet="\n".join(snippet_lines),
            snippet_start_line=max(1, insert_line - SNIPPET_LINES + 1),
        )

    def undo_edit(self, path: str) -> EditResult:
        """Restore the content the file had before its most recent edit."""
        normalized = normalize_path(path)
        restored = self.vfs.restore_previous(normalized)
        if restored is None:
            raise NoHistoryError(normalized)
        logger.debug(f"Undid last edit of {normalized}")
        return EditResult(path=normalized, content=restored, snippet=restored)
