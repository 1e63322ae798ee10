"""Commit workflow configuration.

Read from the first of these that exists, else defaults:

1. ``<workspace>/.checkpilot/git-config.json``
2. ``$XDG_CONFIG_HOME/checkpilot/git-config.json``
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from checkpilot.config.paths import get_paths
from checkpilot.git.scheduler import CommitStrategy

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GitConfig:
    """How and when completed tasks are committed."""

    auto_commit: bool = True  # act on the scheduler's commit signals
    commit_strategy: CommitStrategy = CommitStrategy.PER_PHASE
    project_name: str | None = None  # commit message scope

    @classmethod
    def load(cls) -> "GitConfig":
        """Load the workspace config, else the global one, else defaults."""
        path = get_paths().git_config()
        if path is None:
            logger.debug("No git config file, using defaults")
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            config = cls.from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError, ValueError) as e:
            logger.warning("Invalid git config %s, using defaults: %s", path, e)
            return cls()

        logger.debug("Loaded git config from %s", path)
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GitConfig":
        """Build from parsed JSON.

        Raises:
            TypeError: If ``data`` is not a mapping.
            ValueError: If ``auto_commit`` is not a boolean or
                ``commit_strategy`` is not a known strategy.
        """
        if not isinstance(data, dict):
            raise TypeError("git config must be a JSON object")
        auto_commit = data.get("auto_commit", True)
        if not isinstance(auto_commit, bool):
            raise ValueError(f"auto_commit must be true or false, got {auto_commit!r}")
        project_name = data.get("project_name")
        return cls(
            auto_commit=auto_commit,
            commit_strategy=CommitStrategy(
                data.get("commit_strategy", CommitStrategy.PER_PHASE.value)
            ),
            project_name=str(project_name) if project_name else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "auto_commit": self.auto_commit,
            "commit_strategy": self.commit_strategy.value,
            "project_name": self.project_name,
        }

    def save(self, workspace: bool = True) -> Path:
        """Write to the workspace file, or the global one if not ``workspace``."""
        paths = get_paths()
        path = paths.workspace_git_config if workspace else paths.global_git_config
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info("Saved git config to %s", path)
        return path
