"""Line classification variants.

``PatternType`` is a closed union of four frozen records. Consumers branch
with ``isinstance`` over exactly these four.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class Comment:
    """Trimmed content starts with ``#``."""


@dataclass(frozen=True, slots=True)
class BlankLine:
    """Trimmed content is empty."""


@dataclass(frozen=True, slots=True)
class Fingerprint:
    """A gitleaks finding suppression: ``[commit:]file:rule:line``."""

    file_path: str
    rule_id: str
    line_number: int
    commit_hash: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Invalid:
    """Anything that is not a comment, blank line or fingerprint."""


PatternType = Union[Comment, BlankLine, Fingerprint, Invalid]


def pattern_label(pattern: PatternType) -> str:
    """Short lowercase name used by the reporters."""
    if isinstance(pattern, Fingerprint):
        return "fingerprint"
    if isinstance(pattern, Comment):
        return "comment"
    if isinstance(pattern, BlankLine):
        return "blank"
    if isinstance(pattern, Invalid):
        return "invalid"
    raise TypeError(f"not a pattern type: {pattern!r}")
