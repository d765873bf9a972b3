"""JSON view of a window for scripts and pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from gli_editor.buffer.models import Line
from gli_editor.patterns.models import Fingerprint, pattern_label
from gli_editor.session import EditorSession


def line_to_dict(line: Line) -> Dict[str, Any]:
    pattern = line.pattern_type
    entry: Dict[str, Any] = {
        "line_number": line.line_number,
        "content": line.content,
        "type": pattern_label(pattern),
    }
    if isinstance(pattern, Fingerprint):
        entry["fingerprint"] = {
            "commit_hash": pattern.commit_hash,
            "file_path": pattern.file_path,
            "rule_id": pattern.rule_id,
            "line_number": pattern.line_number,
        }
    return entry


def to_dict(session: EditorSession) -> Dict[str, Any]:
    """Convert the session's current window to a JSON-serialisable dict."""
    window = session.window
    lines: List[Dict[str, Any]] = [line_to_dict(line) for line in window.entries]
    return {
        "version": "1.0",
        "file": str(session.buffer.file_path),
        "total_lines": session.buffer.total_lines,
        "line_ending": session.buffer.line_ending.label,
        "start_line": window.start_line,
        "end_line": window.end_line,
        "lines": lines,
    }


def render(session: EditorSession) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(session), indent=2)
