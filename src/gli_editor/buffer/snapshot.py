"""Detect edits made to the file by another process."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from gli_editor.buffer.file_context import stat_mtime_ns
from gli_editor.errors import MissingFileError


@dataclass(frozen=True)
class FileSnapshot:
    file_path: Path
    last_modified_ns: int

    @classmethod
    def capture(cls, path: Union[str, Path]) -> "FileSnapshot":
        file_path = Path(path)
        return cls(file_path, stat_mtime_ns(file_path))

    def has_changed(self) -> bool:
        """Re-stat the file. A deleted file counts as changed."""
        try:
            return stat_mtime_ns(self.file_path) != self.last_modified_ns
        except MissingFileError:
            return True
