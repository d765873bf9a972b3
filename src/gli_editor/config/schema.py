"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class EditorConfig:
    context: int = 3  # lines shown around a single --lines target
    scroll_margin: int = 3
    read_only: bool = False


@dataclass
class BackupConfig:
    enabled: bool = True
    max_backups: int = 5


@dataclass
class PreviewConfig:
    enabled: bool = True
    context: int = 10  # source lines shown on each side of a fingerprint


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"


@dataclass
class GliEditorConfig:
    version: str = "1.0"
    editor: EditorConfig = field(default_factory=EditorConfig)
    backup: BackupConfig = field(default_factory=BackupConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
