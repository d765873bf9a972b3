"""FileContext — the whole ignore file held in memory as classified lines.

Writes go through a temp file in the target's directory followed by
``os.replace``, so observers see either the old or the new file, never a
partial one.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from gli_editor.buffer.models import DisplayWindow, Line, LineEnding
from gli_editor.errors import (
    FileIOError,
    InvalidArgumentsError,
    InvalidEncodingError,
    LineOutOfBoundsError,
    MissingFileError,
    PermissionDeniedError,
    WriteFailureError,
)


def stat_mtime_ns(path: Path) -> int:
    try:
        return os.stat(path).st_mtime_ns
    except FileNotFoundError as exc:
        raise MissingFileError(path) from exc
    except PermissionError as exc:
        raise PermissionDeniedError(path) from exc
    except OSError as exc:
        raise FileIOError(path, str(exc)) from exc


def split_lines(text: str, ending: LineEnding) -> List[str]:
    """Split *text* on *ending*; a trailing terminator adds no extra line."""
    if not text:
        return []
    parts = text.split(ending.value)
    if parts[-1] == "":
        parts.pop()
    return parts


class FileContext:
    """Ordered, classified lines of one file plus its on-disk metadata."""

    def __init__(
        self,
        file_path: Path,
        lines: List[Line],
        line_ending: LineEnding,
        last_modified_ns: int,
    ) -> None:
        self.file_path = file_path
        self.lines = lines
        self.line_ending = line_ending
        self.last_modified_ns = last_modified_ns

    @classmethod
    def load(cls, path: Union[str, Path]) -> "FileContext":
        """Read and classify every line of *path*."""
        file_path = Path(path).expanduser().resolve()
        last_modified_ns = stat_mtime_ns(file_path)
        try:
            raw = file_path.read_bytes()
        except PermissionError as exc:
            raise PermissionDeniedError(file_path) from exc
        except OSError as exc:
            raise FileIOError(file_path, str(exc)) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(file_path) from exc

        line_ending = LineEnding.detect(text)
        lines = [
            Line(line_number=idx, content=content)
            for idx, content in enumerate(split_lines(text, line_ending), 1)
        ]
        return cls(file_path, lines, line_ending, last_modified_ns)

    # ---- queries ----

    @property
    def total_lines(self) -> int:
        return len(self.lines)

    def get_line(self, line_number: int) -> Optional[Line]:
        if line_number < 1 or line_number > self.total_lines:
            return None
        return self.lines[line_number - 1]

    def get_range(self, start: int, end: int) -> List[Line]:
        """Inclusive slice. ``(0, 0)`` is the empty-file sentinel."""
        if start == 0 and end == 0:
            return []
        if start < 1 or end < 1:
            raise InvalidArgumentsError("Line numbers must be >= 1")
        if start > self.total_lines:
            raise LineOutOfBoundsError(start, self.total_lines)
        if end > self.total_lines:
            raise LineOutOfBoundsError(end, self.total_lines)
        if start > end:
            raise InvalidArgumentsError(
                f"Start line {start} cannot be greater than end line {end}"
            )
        return self.lines[start - 1:end]

    def window(self, start: int, end: int) -> DisplayWindow:
        return DisplayWindow(start, end, tuple(self.get_range(start, end)))

    def check_for_external_modifications(self) -> bool:
        """True if the file on disk changed (or vanished) since load / last write."""
        try:
            return stat_mtime_ns(self.file_path) != self.last_modified_ns
        except MissingFileError:
            return True

    # ---- mutation ----

    def _check_bounds(self, line_number: int) -> None:
        if line_number < 1 or line_number > self.total_lines:
            raise LineOutOfBoundsError(line_number, self.total_lines)

    def update_line(self, line_number: int, new_content: str) -> None:
        self._check_bounds(line_number)
        self.lines[line_number - 1] = Line(line_number=line_number, content=new_content)

    def delete_line(self, line_number: int) -> Line:
        """Remove a line and renumber every line after it. Returns the removed line."""
        self._check_bounds(line_number)
        removed = self.lines.pop(line_number - 1)
        for idx in range(line_number - 1, len(self.lines)):
            self.lines[idx] = Line(line_number=idx + 1, content=self.lines[idx].content)
        return removed

    def serialize(self) -> str:
        ending = self.line_ending.value
        return "".join(f"{line.content}{ending}" for line in self.lines)

    def refresh_metadata(self) -> None:
        self.last_modified_ns = stat_mtime_ns(self.file_path)

    def write_atomic(self) -> None:
        """Replace the file on disk with the buffer contents in one rename."""
        parent = self.file_path.parent
        if not parent.is_dir():
            raise WriteFailureError(f"Invalid file path: no parent directory for {self.file_path}")

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.file_path.name}.", suffix=".tmp", dir=parent
            )
        except OSError as exc:
            raise WriteFailureError(f"Failed to create temp file: {exc}") from exc

        tmp_path = Path(tmp_name)
        try:
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(self.serialize().encode("utf-8"))
                    f.flush()
                    os.fsync(f.fileno())
                if self.file_path.exists():
                    shutil.copymode(self.file_path, tmp_path)
            except OSError as exc:
                raise WriteFailureError(f"Failed to write to temp file: {exc}") from exc
            try:
                os.replace(tmp_path, self.file_path)
            except OSError as exc:
                raise WriteFailureError(f"Failed to persist temp file: {exc}") from exc
        except WriteFailureError:
            tmp_path.unlink(missing_ok=True)
            raise

        self.refresh_metadata()
