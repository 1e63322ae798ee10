"""YAML persistence for resolved task checklists.

Checklists are workspace artifacts at ``.checkpilot/checklists/<task-id>.yaml``
so a later verification pass can reuse exactly what was resolved at
planning time.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from checkpilot.checklist.models import ParsedChecklist
from checkpilot.config.paths import get_paths

logger = logging.getLogger(__name__)


class ChecklistStore:
    """Saves and loads ParsedChecklist artifacts."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory or get_paths().checklists_dir

    def path_for(self, task_id: str) -> Path:
        return self.directory / f"{task_id}.yaml"

    def save(self, task_id: str, checklist: ParsedChecklist) -> Path:
        """Write a checklist for a task, replacing any previous one."""
        path = self.path_for(task_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        content = yaml.safe_dump(
            checklist.to_dict(),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        path.write_text(content, encoding="utf-8")
        logger.info("Saved checklist for %s to %s", task_id, path)
        return path

    def load(self, task_id: str) -> ParsedChecklist | None:
        """Load a task's checklist, or None if missing or unreadable."""
        path = self.path_for(task_id)
        if not path.exists():
            return None

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("Checklist file must contain a mapping")
            return ParsedChecklist.from_dict(data)
        except (ValueError, KeyError, TypeError, yaml.YAMLError, OSError) as e:
            logger.warning("Failed to load checklist from %s: %s", path, e)
            return None
