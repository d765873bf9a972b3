"""Timestamped backups with retention pruning.

Backups live next to the original as ``<name>.backup.<unix-seconds>``.
"""

from __future__ import annotations

import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from gli_editor.errors import WriteFailureError

DEFAULT_MAX_BACKUPS = 5

_BACKUP_MARKER = ".backup."


def _backup_prefix(path: Path) -> str:
    return f"{path.name}{_BACKUP_MARKER}"


def _backup_sequence(name: str) -> int:
    suffix = name.rsplit(_BACKUP_MARKER, 1)[-1]
    return int(suffix) if suffix.isdigit() else -1


@dataclass
class BackupManager:
    max_backups: int = DEFAULT_MAX_BACKUPS

    def create_backup(self, file_path: Union[str, Path]) -> Optional[Path]:
        """Copy *file_path* aside and prune old copies.

        Returns the backup path, or None if there was nothing to back up.
        """
        path = Path(file_path).resolve()
        if not path.exists():
            return None

        timestamp = int(time.time())
        backup_path = path.with_name(f"{_backup_prefix(path)}{timestamp}")
        while backup_path.exists():
            timestamp += 1
            backup_path = path.with_name(f"{_backup_prefix(path)}{timestamp}")

        try:
            shutil.copyfile(path, backup_path)
            shutil.copymode(path, backup_path)
        except OSError as exc:
            raise WriteFailureError(f"Failed to create backup {backup_path.name}: {exc}") from exc

        self.cleanup_old_backups(path)
        return backup_path

    def _scan(self, path: Path) -> List[Tuple[Path, int]]:
        prefix = _backup_prefix(path)
        found: List[Tuple[Path, int]] = []
        with os.scandir(path.parent) as entries:
            for entry in entries:
                if not entry.name.startswith(prefix) or not entry.is_file():
                    continue
                try:
                    found.append((Path(entry.path), entry.stat().st_mtime_ns))
                except OSError:
                    continue
        found.sort(key=lambda item: (item[1], _backup_sequence(item[0].name)))
        return found

    def cleanup_old_backups(self, file_path: Union[str, Path]) -> None:
        """Keep the newest ``max_backups`` backups. Best-effort, never raises."""
        path = Path(file_path).resolve()
        try:
            backups = self._scan(path)
        except OSError:
            return

        excess = len(backups) - self.max_backups
        for backup_path, _ in backups[:max(excess, 0)]:
            try:
                backup_path.unlink()
            except OSError:
                continue

    def list_backups(self, file_path: Union[str, Path]) -> List[Path]:
        """Backups of *file_path*, oldest first."""
        path = Path(file_path).resolve()
        try:
            return [p for p, _ in self._scan(path)]
        except OSError:
            return []
