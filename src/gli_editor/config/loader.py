"""Load and merge configuration from .gli-editor.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gli_editor.config.defaults import CONFIG_FILENAME
from gli_editor.config.schema import (
    OUTPUT_FORMATS,
    BackupConfig,
    EditorConfig,
    GliEditorConfig,
    OutputConfig,
    PreviewConfig,
)


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: GliEditorConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {cfg.output.format}")
    if cfg.backup.max_backups < 0:
        raise ConfigError("backup.max_backups must be >= 0")
    if cfg.editor.context < 0 or cfg.preview.context < 0:
        raise ConfigError("context values must be >= 0")
    if cfg.editor.scroll_margin < 0:
        raise ConfigError("editor.scroll_margin must be >= 0")


def _merge_env_overrides(cfg: GliEditorConfig) -> None:
    """Apply GLI_EDITOR_* environment variable overrides."""
    if val := os.environ.get("GLI_EDITOR_MAX_BACKUPS"):
        try:
            cfg.backup.max_backups = max(int(val), 0)
        except ValueError:
            pass
    if val := os.environ.get("GLI_EDITOR_READ_ONLY"):
        cfg.editor.read_only = val.lower() in ("1", "true", "yes")
    if val := os.environ.get("GLI_EDITOR_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> GliEditorConfig:
    """Load, validate, and return a GliEditorConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = GliEditorConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = GliEditorConfig(
                version=raw.get("version", "1.0"),
                editor=_build_section(raw, EditorConfig, "editor"),
                backup=_build_section(raw, BackupConfig, "backup"),
                preview=_build_section(raw, PreviewConfig, "preview"),
                output=_build_section(raw, OutputConfig, "output"),
            )
            _validate(cfg)
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    return cfg
