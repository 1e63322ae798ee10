"""Type definitions for the orchestration layer."""

from dataclasses import dataclass, field

from checkpilot.checklist.models import ParsedChecklist
from checkpilot.verify.models import HookResult


@dataclass
class CommitResult:
    """Result of acting on a commit signal."""

    committed: bool
    message: str
    tasks: list[str] = field(default_factory=list)


@dataclass
class TaskOutcome:
    """Everything that happened when a task was marked complete."""

    description: str
    phase: str | None = None
    checklist: ParsedChecklist | None = None
    checklist_source: str | None = None  # "parsed" or "generated"
    hook_results: list[HookResult] = field(default_factory=list)
    commit_due: bool = False
    commit_result: CommitResult | None = None

    @property
    def hooks_passed(self) -> bool:
        """True when every hook that ran succeeded (vacuously true if none)."""
        return all(result.success for result in self.hook_results)
