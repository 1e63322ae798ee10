"""Orchestration of the task completion flow."""

from checkpilot.orchestration.task_flow import TaskFlow, resolve_checklist
from checkpilot.orchestration.types import CommitResult, TaskOutcome

__all__ = [
    "CommitResult",
    "TaskFlow",
    "TaskOutcome",
    "resolve_checklist",
]
