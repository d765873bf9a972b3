"""EditorSession — one file open for viewing and line editing.

The session owns the buffer, the viewport, the backup policy and a
snapshot of the file's mtime. Front-ends (the CLI, a TUI) call into it and
render ``window`` / ``message``; the session never draws anything itself.

Save path: update the line, warn if the file changed on disk (the save
still proceeds, last writer wins), back up, write atomically, re-snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from gli_editor.buffer.backup import BackupManager
from gli_editor.buffer.file_context import FileContext
from gli_editor.buffer.models import DisplayWindow, Line
from gli_editor.buffer.snapshot import FileSnapshot
from gli_editor.config.schema import GliEditorConfig
from gli_editor.errors import ConcurrentModificationError, GliError
from gli_editor.navigation import viewport as nav
from gli_editor.navigation.line_spec import AllLines, LineSpec, resolve_line_spec
from gli_editor.navigation.viewport import Viewport
from gli_editor.patterns.models import Fingerprint
from gli_editor.preview import SourcePreview, read_preview

EXTERNAL_CHANGE_WARNING = "Warning: File modified externally!"
READ_ONLY_MESSAGE = "Read-only mode: editing disabled"


@dataclass
class EditState:
    """A pending, uncommitted edit of one line."""

    line_number: int
    original_content: str
    content: str

    @property
    def has_changes(self) -> bool:
        return self.content != self.original_content


@dataclass(frozen=True)
class SaveResult:
    line_number: int
    backup_path: Optional[Path]
    externally_modified: bool


class EditorSession:
    def __init__(
        self,
        buffer: FileContext,
        view: Viewport,
        config: Optional[GliEditorConfig] = None,
        *,
        read_only: Optional[bool] = None,
    ) -> None:
        self.config = config or GliEditorConfig()
        self.buffer = buffer
        self.view = view
        self.read_only = self.config.editor.read_only if read_only is None else read_only
        self.backups = BackupManager(max_backups=self.config.backup.max_backups)
        self.snapshot = FileSnapshot(buffer.file_path, buffer.last_modified_ns)
        self.edit: Optional[EditState] = None
        self.message: Optional[str] = None

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        line_spec: Optional[LineSpec] = None,
        config: Optional[GliEditorConfig] = None,
        *,
        read_only: Optional[bool] = None,
    ) -> "EditorSession":
        buffer = FileContext.load(path)
        start, end = resolve_line_spec(line_spec or AllLines(), buffer.total_lines)
        return cls(buffer, Viewport.initial(start, end), config, read_only=read_only)

    # ---- view ----

    @property
    def window(self) -> DisplayWindow:
        return self.buffer.window(self.view.start_line, self.view.end_line)

    @property
    def current_line(self) -> Optional[Line]:
        return self.buffer.get_line(self.view.cursor)

    def preview(self) -> Optional[SourcePreview]:
        if not self.config.preview.enabled:
            return None
        line = self.current_line
        if line is None or not isinstance(line.pattern_type, Fingerprint):
            return None
        return read_preview(
            self.buffer.file_path.parent, line.pattern_type, self.config.preview.context
        )

    # ---- navigation ----

    def scroll_up(self) -> None:
        self.view = nav.scroll_up(self.view, self.buffer.total_lines, self.config.editor.scroll_margin)

    def scroll_down(self) -> None:
        self.view = nav.scroll_down(self.view, self.buffer.total_lines, self.config.editor.scroll_margin)

    def page_up(self) -> None:
        self.view = nav.page_up(self.view, self.buffer.total_lines)

    def page_down(self) -> None:
        self.view = nav.page_down(self.view, self.buffer.total_lines)

    def jump_to_top(self) -> None:
        self.view = nav.jump_to_top(self.view, self.buffer.total_lines)

    def jump_to_bottom(self) -> None:
        self.view = nav.jump_to_bottom(self.view, self.buffer.total_lines)

    def jump_to_line(self, target: int) -> None:
        self.view, self.message = nav.jump_to_line(self.view, self.buffer.total_lines, target)

    def resize(self, content_height: int) -> None:
        self.view = nav.resize(self.view, self.buffer.total_lines, content_height)

    # ---- editing ----

    def begin_edit(self) -> Optional[EditState]:
        if self.read_only:
            self.message = READ_ONLY_MESSAGE
            return None
        line = self.current_line
        if line is None:
            return None
        self.edit = EditState(line.line_number, line.content, line.content)
        self.message = None
        return self.edit

    def cancel_edit(self) -> None:
        self.edit = None
        self.message = "Edit cancelled"

    def save_edit(self, new_content: Optional[str] = None) -> Optional[SaveResult]:
        """Commit the pending edit. Returns None when there was nothing to save.

        On ``GliError`` the buffer line is put back and the pending edit is
        kept, so the change is not lost and a later cancel leaves no trace.
        """
        if self.edit is None:
            return None
        if new_content is not None:
            self.edit.content = new_content
        if not self.edit.has_changes:
            self.edit = None
            return None

        line_number = self.edit.line_number
        self.buffer.update_line(line_number, self.edit.content)
        try:
            result = self._commit(line_number)
        except GliError:
            self.buffer.update_line(line_number, self.edit.original_content)
            raise
        self.edit = None
        self.message = self._saved_message(f"Saved line {line_number}", result)
        return result

    def delete_line(self, line_number: int) -> Optional[SaveResult]:
        if self.read_only:
            self.message = READ_ONLY_MESSAGE
            return None
        saved_lines = list(self.buffer.lines)
        self.buffer.delete_line(line_number)
        try:
            result = self._commit(line_number)
        except GliError:
            self.buffer.lines = saved_lines
            raise
        self.view = nav.reclamp(self.view, self.buffer.total_lines)
        self.message = self._saved_message(f"Deleted line {line_number}", result)
        return result

    def ensure_unmodified(self) -> None:
        """Raise if the file changed on disk since it was loaded or last saved."""
        if self.snapshot.has_changed():
            raise ConcurrentModificationError(self.buffer.file_path)

    def _commit(self, line_number: int) -> SaveResult:
        externally_modified = self.snapshot.has_changed()
        backup_path = None
        if self.config.backup.enabled:
            backup_path = self.backups.create_backup(self.buffer.file_path)
        self.buffer.write_atomic()
        self.snapshot = FileSnapshot(self.buffer.file_path, self.buffer.last_modified_ns)
        return SaveResult(line_number, backup_path, externally_modified)

    @staticmethod
    def _saved_message(prefix: str, result: SaveResult) -> str:
        backup = result.backup_path.name if result.backup_path else "none"
        text = f"{prefix} (backup: {backup})"
        if result.externally_modified:
            text = f"{EXTERNAL_CHANGE_WARNING} {text}"
        return text
