"""Task completion flow: checklist, verification hooks, commit cadence.

Wires the core pieces together the way a task-execution loop uses them:

1. Resolve the checklist for the task's prompt (parsed, else generated).
2. Run the project's verification hooks.
3. Ask the CommitScheduler whether a commit is due and, if so, commit.
"""

from __future__ import annotations

import logging
from pathlib import Path

from checkpilot.checklist.generator import BasicChecklistGenerator, PromptIntent
from checkpilot.checklist.models import ParsedChecklist
from checkpilot.checklist.parser import ChecklistParser
from checkpilot.checklist.store import ChecklistStore
from checkpilot.git.config import GitConfig
from checkpilot.git.scheduler import CommitScheduler
from checkpilot.git.service import CommitOptions, GitManager
from checkpilot.orchestration.types import CommitResult, TaskOutcome
from checkpilot.verify.hooks import VerificationHooks

logger = logging.getLogger(__name__)

SOURCE_PARSED = "parsed"
SOURCE_GENERATED = "generated"


def resolve_checklist(
    prompt_text: str,
    intent: PromptIntent | str,
    *,
    parser: ChecklistParser | None = None,
    generator: BasicChecklistGenerator | None = None,
) -> tuple[ParsedChecklist, str]:
    """Return the prompt's own checklist, or a generated one if it has none."""
    parsed = (parser or ChecklistParser()).parse(prompt_text)
    if parsed.total_items > 0:
        return parsed, SOURCE_PARSED

    generated = (generator or BasicChecklistGenerator()).generate_from_prompt(
        prompt_text, intent
    )
    return generated, SOURCE_GENERATED


class TaskFlow:
    """Reference task loop glue around the checklist, hook and git pieces."""

    def __init__(
        self,
        project_dir: Path,
        *,
        git_config: GitConfig | None = None,
        git_manager: GitManager | None = None,
        hooks: VerificationHooks | None = None,
        store: ChecklistStore | None = None,
        run_hooks: bool = True,
    ) -> None:
        self.project_dir = project_dir
        self.config = git_config or GitConfig.load()
        self.scheduler = CommitScheduler(self.config.commit_strategy)
        self._git = git_manager or GitManager(project_dir)
        self._hooks = hooks or VerificationHooks(project_dir)
        self._store = store
        self._run_hooks = run_hooks
        self._pending_tasks: list[str] = []

    @property
    def pending_tasks(self) -> list[str]:
        """Completed tasks not yet covered by a commit."""
        return list(self._pending_tasks)

    def complete_task(
        self,
        description: str,
        phase: str | None = None,
        *,
        task_id: str | None = None,
        prompt_text: str | None = None,
        intent: PromptIntent | str = PromptIntent.CODE_GENERATION,
    ) -> TaskOutcome:
        """Record a completed task and commit if the strategy says so."""
        outcome = TaskOutcome(description=description, phase=phase)

        if prompt_text is not None:
            checklist, source = resolve_checklist(prompt_text, intent)
            outcome.checklist = checklist
            outcome.checklist_source = source
            if self._store is not None and task_id is not None:
                self._store.save(task_id, checklist)

        if self._run_hooks:
            outcome.hook_results = self._hooks.run_all_hooks()
            if not outcome.hooks_passed:
                logger.warning("Verification hooks failed for task: %s", description)

        self._pending_tasks.append(description)
        outcome.commit_due = self.scheduler.task_completed(phase)
        if outcome.commit_due:
            outcome.commit_result = self._commit(phase)
        return outcome

    def complete_phase(self, phase: str) -> CommitResult | None:
        """Close a phase; returns the commit result when one was due."""
        if not self.scheduler.phase_completed():
            return None
        return self._commit(phase)

    def _commit(self, phase: str | None) -> CommitResult:
        tasks = list(self._pending_tasks)
        # The signal has been acted on whatever the outcome below.
        self.scheduler.reset_commit_counter()

        if not self.config.auto_commit:
            return CommitResult(committed=False, message="Auto-commit disabled")

        if not self._git.is_git_repository():
            return CommitResult(committed=False, message="Not a git repository")

        committed = self._git.create_commit(
            CommitOptions(
                tasks=tasks,
                phase=phase,
                project_name=self.config.project_name,
            )
        )
        if not committed:
            return CommitResult(
                committed=False, message="Nothing committed", tasks=tasks
            )

        self._pending_tasks.clear()
        logger.info("Committed %d task(s) for phase %s", len(tasks), phase)
        return CommitResult(
            committed=True,
            message=f"Committed {len(tasks)} task(s)",
            tasks=tasks,
        )
