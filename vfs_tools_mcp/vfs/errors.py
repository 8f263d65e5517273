"""Error taxonomy for the virtual file system and its edit engine."""


class VFSError(Exception):
    """Base class for recoverable virtual file system failures.

    Every failure carries a ``kind`` matching the taxonomy understood by the
    tools and the ``path`` it refers to.
    """

    kind: str = "VFSError"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class NotFoundError(VFSError):
    kind = "NotFound"

    def __init__(self, path: str) -> None:
        super().__init__(f"The path {path} does not exist.", path)


class NotDirectoryError(VFSError):
    kind = "NotDirectory"

    def __init__(self, path: str) -> None:
        super().__init__(f"The path {path} is not a directory.", path)


class IsDirectoryError(VFSError):
    kind = "IsDirectory"

    def __init__(self, path: str) -> None:
        super().__init__(
            f"The path {path} is a directory and this operation is not allowed on directories.",
            path,
        )


class AlreadyExistsError(VFSError):
    kind = "AlreadyExists"

    def __init__(self, path: str) -> None:
        super().__init__(f"File already exists at: {path}.", path)


class NoMatchError(VFSError):
    kind = "NoMatch"


class AmbiguousMatchError(VFSError):
    kind = "AmbiguousMatch"

    def __init__(self, message: str, path: str, lines: list[int]) -> None:
        super().__init__(message, path)
        self.lines = lines


class InvalidLineNumberError(VFSError):
    kind = "InvalidLineNumber"


class InvalidViewRangeError(VFSError):
    kind = "InvalidViewRange"


class NoHistoryError(VFSError):
    kind = "NoHistory"

    def __init__(self, path: str) -> None:
        super().__init__(f"No edit history found for {path}.", path)


class InvalidPathError(VFSError):
    kind = "InvalidPath"
