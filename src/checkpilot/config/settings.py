"""Global user settings stored as JSON under the XDG config directory."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from checkpilot.config.paths import get_paths

logger = logging.getLogger(__name__)

DEFAULT_HOOK_TIMEOUT_MS = 60000
DEFAULT_INTENT = "code-generation"


def get_settings_path() -> Path:
    return get_paths().global_settings


def _read_settings(path: Path) -> dict[str, Any]:
    """Parse the settings file; a missing or broken file reads as empty."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


class Settings:
    """Persistent user settings for checkpilot."""

    _defaults: dict[str, Any] = {
        "hook_timeout_ms": DEFAULT_HOOK_TIMEOUT_MS,
        "default_intent": DEFAULT_INTENT,
    }

    def __init__(self) -> None:
        self._data: dict[str, Any] = _read_settings(get_settings_path())

    def _save(self) -> None:
        path = get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save settings to %s: %s", path, e)
            return
        logger.info("Saved settings to %s", path)

    def get(self, key: str) -> Any:
        """Stored value for ``key``, else its default (None if it has none)."""
        if key in self._data:
            return self._data[key]
        return self._defaults.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and write the file."""
        self._data[key] = value
        self._save()

    @property
    def hook_timeout_ms(self) -> int:
        """Timeout applied to detected verification hooks.

        Non-numeric or non-positive stored values fall back to the default.
        """
        try:
            value = int(self._data.get("hook_timeout_ms", DEFAULT_HOOK_TIMEOUT_MS))
        except (TypeError, ValueError):
            return DEFAULT_HOOK_TIMEOUT_MS
        return value if value > 0 else DEFAULT_HOOK_TIMEOUT_MS

    @hook_timeout_ms.setter
    def hook_timeout_ms(self, value: int) -> None:
        self.set("hook_timeout_ms", int(value))

    @property
    def default_intent(self) -> str:
        """Intent used for generated checklists when none is given."""
        return str(self._data.get("default_intent") or DEFAULT_INTENT)

    @default_intent.setter
    def default_intent(self, value: str) -> None:
        self.set("default_intent", value)


settings = Settings()
