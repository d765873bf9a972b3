"""Configuration loading, schema, and defaults."""

from gli_editor.config.loader import ConfigError, load_config
from gli_editor.config.schema import GliEditorConfig

__all__ = [
    "ConfigError",
    "GliEditorConfig",
    "load_config",
]
