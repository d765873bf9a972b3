"""Error types raised by the editor core.

Every fallible operation either returns its value or raises exactly one
``GliError`` subclass. The CLI turns these into user-facing text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class GliError(Exception):
    """Base class for all gli-editor errors."""


class MissingFileError(GliError):
    def __init__(self, path: PathLike) -> None:
        self.path = str(path)
        super().__init__(
            f"File not found: {self.path}\n\n"
            "Suggestion: Create the file with:\n  touch .gitleaksignore"
        )


class PermissionDeniedError(GliError):
    def __init__(self, path: PathLike) -> None:
        self.path = str(path)
        super().__init__(
            f"Permission denied: {self.path}\n\n"
            f"Suggestion: Check file permissions with:\n  ls -l {self.path}"
        )


class InvalidEncodingError(GliError):
    def __init__(self, path: PathLike) -> None:
        self.path = str(path)
        super().__init__(f"File contains invalid UTF-8: {self.path}")


class LineOutOfBoundsError(GliError):
    """A read, update or delete addressed a line that does not exist."""

    def __init__(self, requested: int, total: int) -> None:
        self.requested = requested
        self.total = total
        super().__init__(
            f"Line {requested} is out of bounds (file has {total} lines)\n\n"
            f"Valid range: 1-{total}"
        )


class InvalidArgumentsError(GliError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid arguments: {detail}")


class ConcurrentModificationError(GliError):
    """The file changed on disk since it was loaded.

    The save path only warns about this; the class exists for front-ends
    that prefer to block instead.
    """

    def __init__(self, path: PathLike) -> None:
        self.path = str(path)
        super().__init__(f"File was modified by another process: {self.path}")


class WriteFailureError(GliError):
    """An atomic write could not be committed. The target is untouched."""

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Unable to save changes: {cause}")


class FileIOError(GliError):
    def __init__(self, path: PathLike, detail: str) -> None:
        self.path = str(path)
        self.detail = detail
        super().__init__(f"I/O error on {self.path}: {detail}")
