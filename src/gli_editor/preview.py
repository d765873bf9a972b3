"""Show the source lines a fingerprint points at."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from gli_editor.patterns.models import Fingerprint

DEFAULT_PREVIEW_CONTEXT = 10


@dataclass(frozen=True)
class SourcePreview:
    file_path: str
    target_line: int
    start_line: int
    lines: List[str]


def read_preview(
    base_dir: Path,
    fingerprint: Fingerprint,
    context: int = DEFAULT_PREVIEW_CONTEXT,
) -> Optional[SourcePreview]:
    """Return the lines around the fingerprint's target, or None if unreadable.

    Relative paths resolve against *base_dir* (the ignore file's directory).
    The target line is clamped to the file's length.
    """
    source = Path(fingerprint.file_path)
    if not source.is_absolute():
        source = base_dir / source
    try:
        all_lines = source.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return None
    if not all_lines:
        return None

    target = min(max(fingerprint.line_number, 1), len(all_lines))
    start = max(target - context, 1)
    end = min(target + context, len(all_lines))
    return SourcePreview(
        file_path=fingerprint.file_path,
        target_line=target,
        start_line=start,
        lines=all_lines[start - 1:end],
    )
