"""Pattern classification for ignore-file lines."""

from gli_editor.patterns.classifier import classify, is_commit_hash
from gli_editor.patterns.models import (
    BlankLine,
    Comment,
    Fingerprint,
    Invalid,
    PatternType,
    pattern_label,
)

__all__ = [
    "BlankLine",
    "Comment",
    "Fingerprint",
    "Invalid",
    "PatternType",
    "classify",
    "is_commit_hash",
    "pattern_label",
]
