"""Commit cadence state machine.

The scheduler only answers "should a commit happen now?"; the caller acts
on a True answer and then calls ``reset_commit_counter()``. Without the
reset the counter keeps accumulating, so under ``per-5-tasks`` the next
True arrives five calls later rather than immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

COMMIT_BATCH_SIZE = 5


class CommitStrategy(str, Enum):
    """When task completion triggers a commit."""

    PER_TASK = "per-task"
    PER_5_TASKS = "per-5-tasks"
    PER_PHASE = "per-phase"
    NONE = "none"


@dataclass(slots=True)
class SchedulerState:
    """Mutable counters of a CommitScheduler."""

    tasks_since_commit: int = 0
    current_phase: str | None = None


class CommitScheduler:
    """Decides when commits are due under a fixed strategy."""

    def __init__(self, strategy: CommitStrategy | str) -> None:
        self._strategy = CommitStrategy(strategy)
        self._state = SchedulerState()

    @property
    def strategy(self) -> CommitStrategy:
        return self._strategy

    @property
    def current_phase(self) -> str | None:
        """Label of the most recently completed task's phase."""
        return self._state.current_phase

    def task_completed(self, phase: str | None = None) -> bool:
        """Record a completed task; True when a commit is due."""
        if phase is not None:
            self._state.current_phase = phase

        if self._strategy is CommitStrategy.NONE:
            return False

        self._state.tasks_since_commit += 1
        if self._strategy is CommitStrategy.PER_TASK:
            return True
        if self._strategy is CommitStrategy.PER_5_TASKS:
            count = self._state.tasks_since_commit
            return count > 0 and count % COMMIT_BATCH_SIZE == 0
        # per-phase commits are driven by phase_completed()
        return False

    def phase_completed(self) -> bool:
        """True when a commit is due at the end of a phase."""
        return self._strategy is CommitStrategy.PER_PHASE

    def reset_commit_counter(self) -> None:
        self._state.tasks_since_commit = 0

    def get_task_count_since_last_commit(self) -> int:
        return self._state.tasks_since_commit
