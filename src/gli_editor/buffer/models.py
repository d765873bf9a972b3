"""Data models for the in-memory line buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from gli_editor.patterns.classifier import classify
from gli_editor.patterns.models import PatternType


class LineEnding(str, Enum):
    LF = "\n"
    CRLF = "\r\n"
    CR = "\r"

    @classmethod
    def detect(cls, text: str) -> "LineEnding":
        """CRLF before LF before CR; LF when the text has no line break."""
        if "\r\n" in text:
            return cls.CRLF
        if "\n" in text:
            return cls.LF
        if "\r" in text:
            return cls.CR
        return cls.LF

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class Line:
    """One physical line. ``pattern_type`` is always derived from ``content``."""

    line_number: int
    content: str
    pattern_type: PatternType = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern_type", classify(self.content))


@dataclass(frozen=True)
class DisplayWindow:
    """Inclusive, 1-based slice of the buffer materialised for display.

    ``(0, 0)`` with no entries denotes an empty file.
    """

    start_line: int
    end_line: int
    entries: Tuple[Line, ...] = ()

    @property
    def size(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def contains_line(self, line_number: int) -> bool:
        return self.start_line <= line_number <= self.end_line and not self.is_empty

    def get_line(self, line_number: int) -> Optional[Line]:
        if not self.contains_line(line_number):
            return None
        return self.entries[line_number - self.start_line]
