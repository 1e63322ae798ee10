"""Configuration management for checkpilot."""

from __future__ import annotations

from checkpilot.config.paths import CheckpilotPaths, get_paths, reset_paths
from checkpilot.config.settings import Settings, get_settings_path, settings

__all__ = [
    "CheckpilotPaths",
    "Settings",
    "get_paths",
    "get_settings_path",
    "reset_paths",
    "settings",
]
