"""Where checkpilot keeps its files.

Workspace files live in ``<workspace>/.checkpilot/``. Global files live in
``$XDG_CONFIG_HOME/checkpilot/``, which is ``~/.config/checkpilot/`` when the
variable is unset or empty.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

APP_DIR_NAME = "checkpilot"
WORKSPACE_DIR_NAME = ".checkpilot"
GIT_CONFIG_NAME = "git-config.json"


def _config_home() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


@dataclass
class CheckpilotPaths:
    """Resolved file locations for one workspace."""

    workspace: Path
    config_home: Path = field(default_factory=_config_home)

    # Workspace

    @property
    def workspace_config(self) -> Path:
        return self.workspace / WORKSPACE_DIR_NAME

    @property
    def workspace_git_config(self) -> Path:
        return self.workspace_config / GIT_CONFIG_NAME

    @property
    def checklists_dir(self) -> Path:
        """Saved task checklists, one YAML file per task."""
        return self.workspace_config / "checklists"

    @property
    def debug_log(self) -> Path:
        return self.workspace_config / "debug.log"

    # Global

    @property
    def global_config_dir(self) -> Path:
        return self.config_home / APP_DIR_NAME

    @property
    def global_settings(self) -> Path:
        return self.global_config_dir / "settings.json"

    @property
    def global_git_config(self) -> Path:
        return self.global_config_dir / GIT_CONFIG_NAME

    def git_config(self) -> Path | None:
        """First git config that exists, workspace before global."""
        candidates = (self.workspace_git_config, self.global_git_config)
        return next((path for path in candidates if path.exists()), None)


_paths: CheckpilotPaths | None = None


def get_paths(workspace: Path | None = None) -> CheckpilotPaths:
    """Return the process-wide paths, creating them on first use.

    ``workspace`` is only read on the first call and defaults to the cwd.
    """
    global _paths
    if _paths is None:
        _paths = CheckpilotPaths(workspace=workspace or Path.cwd())
    return _paths


def reset_paths() -> None:
    """Drop the cached paths so the next get_paths() resolves them again."""
    global _paths
    _paths = None
