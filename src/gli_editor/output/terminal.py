"""Rich terminal view — line table, status line, source preview."""

from __future__ import annotations

from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gli_editor.patterns.models import Fingerprint, PatternType, pattern_label
from gli_editor.preview import SourcePreview
from gli_editor.session import EditorSession

_PATTERN_STYLE = {
    "fingerprint": "bold black on green",
    "comment": "bold white on grey37",
    "blank": "dim",
    "invalid": "bold white on red",
}

_CONTENT_STYLE = {
    "fingerprint": "",
    "comment": "dim italic",
    "blank": "",
    "invalid": "red",
}


def _pattern_pill(pattern: PatternType) -> Text:
    label = pattern_label(pattern)
    return Text(f" {label.upper()} ", style=_PATTERN_STYLE.get(label, ""))


def _content_text(pattern: PatternType, content: str) -> Text:
    if not isinstance(pattern, Fingerprint):
        return Text(content, style=_CONTENT_STYLE.get(pattern_label(pattern), ""))
    text = Text()
    if pattern.commit_hash:
        text.append(pattern.commit_hash[:8], style="yellow")
        text.append("…:", style="dim")
    text.append(pattern.file_path, style="magenta")
    text.append(":", style="dim")
    text.append(pattern.rule_id, style="cyan")
    text.append(":", style="dim")
    text.append(str(pattern.line_number), style="green")
    return text


def _preview_panel(preview: SourcePreview) -> Panel:
    rows = []
    for offset, source_line in enumerate(preview.lines):
        number = preview.start_line + offset
        style = "bold reverse" if number == preview.target_line else ""
        row = Text(f"{number:>5} │ ", style="dim")
        row.append(source_line, style=style)
        rows.append(row)
    return Panel(
        Group(*rows),
        title=Text(f"{preview.file_path}:{preview.target_line}"),
        border_style="dim",
    )


def render(
    session: EditorSession,
    *,
    console: Optional[Console] = None,
    show_preview: bool = True,
) -> None:
    """Print the session's current window to the terminal."""
    console = console or Console()
    buffer = session.buffer
    window = session.window

    if window.is_empty:
        console.print(Text(f"{buffer.file_path} is empty.", style="dim"))
    else:
        table = Table(
            title=Text(str(buffer.file_path), style="bold"),
            border_style="dim",
            show_header=True,
        )
        table.add_column("Line", justify="right", style="green")
        table.add_column("Type", justify="center", width=15)
        table.add_column("Entry", min_width=20, overflow="fold")

        for line in window.entries:
            table.add_row(
                str(line.line_number),
                _pattern_pill(line.pattern_type),
                _content_text(line.pattern_type, line.content),
                style="reverse" if line.line_number == session.view.cursor else None,
            )
        console.print(table)

    status = (
        f"[dim]Lines[/dim] {window.start_line}-{window.end_line} of {buffer.total_lines}"
        f"  [dim]Ending[/dim] {buffer.line_ending.label}"
    )
    if session.read_only:
        status += "  [yellow]read-only[/yellow]"
    console.print(status)
    if session.message:
        console.print(Text(session.message, style="yellow"))

    if show_preview:
        preview = session.preview()
        if preview is not None:
            console.print(_preview_panel(preview))
