"""Git integration for checkpilot.

Key components:
- GitManager: git queries and the stage-and-commit sequence
- CommitScheduler: decides when a commit is due for a CommitStrategy
- GitConfig: workflow configuration (strategy, auto-commit, project name)
"""

from __future__ import annotations

from checkpilot.git.config import GitConfig
from checkpilot.git.scheduler import CommitScheduler, CommitStrategy
from checkpilot.git.service import (
    CommitOptions,
    GitCommandError,
    GitManager,
    GitSetupStatus,
    build_commit_message,
    escape_for_double_quotes,
)

__all__ = [
    # Service
    "GitManager",
    "GitCommandError",
    "GitSetupStatus",
    "CommitOptions",
    "build_commit_message",
    "escape_for_double_quotes",
    # Scheduling
    "CommitScheduler",
    "CommitStrategy",
    # Config
    "GitConfig",
]
