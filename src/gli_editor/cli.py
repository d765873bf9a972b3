"""gli-editor CLI — Typer application with view, set, delete, check, backups, and init."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from gli_editor import __version__
from gli_editor.config.schema import GliEditorConfig
from gli_editor.errors import GliError, LineOutOfBoundsError

app = typer.Typer(
    name="gli-editor",
    help="View and edit .gitleaksignore files line by line.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

DEFAULT_FILE = "./.gitleaksignore"


def _fail(exc: Exception, label: str = "Error") -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {escape(str(exc))}", soft_wrap=True)
    return typer.Exit(code=2)


def _load_config(config: Optional[str]) -> GliEditorConfig:
    from gli_editor.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        raise _fail(exc, "Config error") from exc


def _open_session(file: str, cfg: GliEditorConfig, lines: Optional[str] = None, context: Optional[int] = None):
    from gli_editor.navigation.line_spec import parse_line_spec
    from gli_editor.session import EditorSession

    try:
        spec = parse_line_spec(lines, cfg.editor.context if context is None else context)
        return EditorSession.open(file, spec, cfg)
    except GliError as exc:
        raise _fail(exc) from exc


# ── view ──────────────────────────────────────────────────────────────────────


@app.command()
def view(
    file: str = typer.Option(DEFAULT_FILE, "--file", "-f", help="Path to .gitleaksignore file"),
    lines: Optional[str] = typer.Option(None, "--lines", "-l", help="Lines to show: 42 | 42+5 | 10-50"),
    context: Optional[int] = typer.Option(None, "--context", "-C", min=0, help="Context lines around a single line"),
    format: Optional[str] = typer.Option(None, "--format", help="Output format: terminal | json"),
    preview: Optional[bool] = typer.Option(None, "--preview/--no-preview", help="Show the source a fingerprint points at"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gli-editor.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Show a window of the ignore file with each line classified."""
    from gli_editor.output import json_report, terminal

    cfg = _load_config(config)
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if preview is not None:
        cfg.preview.enabled = preview

    session = _open_session(file, cfg, lines, context)

    if verbose:
        console.print(f"[dim]File: {escape(str(session.buffer.file_path))}[/dim]")
        console.print(f"[dim]Lines: {session.buffer.total_lines}[/dim]")
        console.print(f"[dim]Line ending: {session.buffer.line_ending.label}[/dim]")

    if cfg.output.format == "json":
        print(json_report.render(session))
    else:
        terminal.render(session, show_preview=cfg.preview.enabled)


# ── set ───────────────────────────────────────────────────────────────────────


@app.command("set")
def set_line(
    line: int = typer.Argument(..., help="1-based line number to replace"),
    text: str = typer.Argument(..., help="New content for the line"),
    file: str = typer.Option(DEFAULT_FILE, "--file", "-f", help="Path to .gitleaksignore file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gli-editor.toml"),
) -> None:
    """Replace one line, with a backup and an atomic write."""
    cfg = _load_config(config)
    session = _open_session(file, cfg)

    try:
        if session.buffer.get_line(line) is None:
            raise LineOutOfBoundsError(line, session.buffer.total_lines)
        session.jump_to_line(line)
        if session.begin_edit() is None:
            console.print(f"[yellow]⚠[/yellow]  {escape(session.message or 'Nothing to edit')}")
            raise typer.Exit(code=1)
        result = session.save_edit(text)
    except GliError as exc:
        raise _fail(exc) from exc

    if result is None:
        console.print(f"[dim]Line {line} unchanged.[/dim]")
        return
    console.print(f"[green]✓[/green] {escape(session.message or '')}", soft_wrap=True)


# ── delete ────────────────────────────────────────────────────────────────────


@app.command()
def delete(
    line: int = typer.Argument(..., help="1-based line number to remove"),
    file: str = typer.Option(DEFAULT_FILE, "--file", "-f", help="Path to .gitleaksignore file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gli-editor.toml"),
) -> None:
    """Remove one line; later lines move up."""
    cfg = _load_config(config)
    session = _open_session(file, cfg)

    try:
        result = session.delete_line(line)
    except GliError as exc:
        raise _fail(exc) from exc

    if result is None:
        console.print(f"[yellow]⚠[/yellow]  {escape(session.message or '')}")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] {escape(session.message or '')}", soft_wrap=True)


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    file: str = typer.Option(DEFAULT_FILE, "--file", "-f", help="Path to .gitleaksignore file"),
) -> None:
    """Report lines that are not comments, blanks, or valid fingerprints."""
    from gli_editor.buffer.file_context import FileContext
    from gli_editor.patterns.models import Invalid, pattern_label

    try:
        buffer = FileContext.load(file)
    except GliError as exc:
        raise _fail(exc) from exc

    counts = Counter(pattern_label(line.pattern_type) for line in buffer.lines)
    invalid = [line for line in buffer.lines if isinstance(line.pattern_type, Invalid)]

    console.print(
        f"[dim]Fingerprints:[/dim] {counts['fingerprint']}  "
        f"[dim]Comments:[/dim] {counts['comment']}  "
        f"[dim]Blank:[/dim] {counts['blank']}  "
        f"[dim]Invalid:[/dim] {counts['invalid']}"
    )
    if not invalid:
        console.print(f"[green]✓[/green] All {buffer.total_lines} lines are valid.")
        return

    console.print(f"[bold]Found {len(invalid)} invalid line(s):[/bold]")
    for line in invalid:
        console.print(f"  [green]{line.line_number}[/green]  [red]{escape(line.content)}[/red]")
    raise typer.Exit(code=1)


# ── backups ───────────────────────────────────────────────────────────────────


@app.command()
def backups(
    file: str = typer.Option(DEFAULT_FILE, "--file", "-f", help="Path to .gitleaksignore file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gli-editor.toml"),
) -> None:
    """List backups of the ignore file, oldest first."""
    from gli_editor.buffer.backup import BackupManager

    cfg = _load_config(config)
    found = BackupManager(max_backups=cfg.backup.max_backups).list_backups(file)
    if not found:
        console.print("[dim]No backups found.[/dim]")
        return
    for path in found:
        console.print(f"  {escape(str(path))}", soft_wrap=True)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .gli-editor.toml in the current directory."""
    from gli_editor.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gli-editor {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """gli-editor — view and edit .gitleaksignore files line by line."""
