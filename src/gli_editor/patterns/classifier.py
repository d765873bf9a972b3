"""Hand-written fingerprint parser.

Fields are split from the right: ``file_path`` may itself contain ``:``
(e.g. ``archive.tar.gz:inner.tar:secret.env``), so only the trailing
``rule_id`` / ``line_number`` and the optional leading 40-hex commit hash
have a fixed shape.
"""

from __future__ import annotations

import string
from typing import Optional

from gli_editor.patterns.models import (
    BlankLine,
    Comment,
    Fingerprint,
    Invalid,
    PatternType,
)

COMMIT_HASH_LENGTH = 40

_HEX_DIGITS = frozenset(string.hexdigits)


def is_commit_hash(text: str) -> bool:
    """Return True if *text* is exactly 40 hexadecimal characters."""
    return len(text) == COMMIT_HASH_LENGTH and all(c in _HEX_DIGITS for c in text)


def parse_uint(text: str) -> Optional[int]:
    """Parse a non-negative decimal integer (ASCII digits only)."""
    if not text or not text.isascii() or not text.isdigit():
        return None
    return int(text)


def classify(content: str) -> PatternType:
    """Classify one line of a .gitleaksignore file. Total and pure."""
    trimmed = content.strip()

    if not trimmed:
        return BlankLine()
    if trimmed.startswith("#"):
        return Comment()

    rest, sep, number_text = trimmed.rpartition(":")
    if not sep:
        return Invalid()
    line_number = parse_uint(number_text)
    if line_number is None:
        return Invalid()

    remaining, sep, rule_id = rest.rpartition(":")
    if not sep or not rule_id:
        return Invalid()

    commit_hash: Optional[str] = None
    file_path = remaining
    if remaining[COMMIT_HASH_LENGTH:COMMIT_HASH_LENGTH + 1] == ":" and is_commit_hash(
        remaining[:COMMIT_HASH_LENGTH]
    ):
        commit_hash = remaining[:COMMIT_HASH_LENGTH]
        file_path = remaining[COMMIT_HASH_LENGTH + 1:]

    if not file_path:
        return Invalid()

    return Fingerprint(
        file_path=file_path,
        rule_id=rule_id,
        line_number=line_number,
        commit_hash=commit_hash,
    )
