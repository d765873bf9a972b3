"""Line buffer — file context, snapshots, backups."""

from gli_editor.buffer.backup import DEFAULT_MAX_BACKUPS, BackupManager
from gli_editor.buffer.file_context import FileContext
from gli_editor.buffer.models import DisplayWindow, Line, LineEnding
from gli_editor.buffer.snapshot import FileSnapshot

__all__ = [
    "DEFAULT_MAX_BACKUPS",
    "BackupManager",
    "DisplayWindow",
    "FileContext",
    "FileSnapshot",
    "Line",
    "LineEnding",
]
