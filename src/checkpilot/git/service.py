"""Git operations for task commits.

GitManager wraps the handful of git queries and writes the task loop needs.
Every public method degrades to a safe default when git fails; failures
are logged, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from checkpilot.runtime.command_runner import CommandRunnerLike, get_command_runner
from checkpilot.runtime.timeout_policy import TimeoutDomain

logger = logging.getLogger(__name__)

UNKNOWN_BRANCH = "unknown"
STATUS_UNAVAILABLE = "Unable to get git status"


class GitCommandError(Exception):
    """A git invocation failed to start, timed out, or exited non-zero."""

    def __init__(self, command: str, exit_code: int, output: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(f"{command} failed with exit code {exit_code}: {output}")


@dataclass(slots=True)
class CommitOptions:
    """What a commit covers."""

    tasks: list[str] = field(default_factory=list)
    phase: str | None = None
    project_name: str | None = None


@dataclass(frozen=True, slots=True)
class GitSetupStatus:
    """Snapshot of the repository state."""

    is_repo: bool
    has_changes: bool
    current_branch: str


def escape_for_double_quotes(text: str) -> str:
    """Escape text for a double-quoted POSIX shell argument."""
    for char in ("\\", '"', "$", "`"):
        text = text.replace(char, f"\\{char}")
    return text


def build_commit_message(options: CommitOptions) -> str:
    """Build the commit message for a batch of completed tasks."""
    scope = f"({options.project_name})" if options.project_name else ""
    if options.phase:
        subject = f"feat{scope}: {options.phase}"
    else:
        count = len(options.tasks)
        subject = f"feat{scope}: complete {count} task{'s' if count != 1 else ''}"

    lines = [subject]
    if options.project_name:
        lines += ["", f"Project: {options.project_name}"]
    if options.phase:
        if not options.project_name:
            lines.append("")
        lines.append(f"Phase: {options.phase}")
    if options.tasks:
        lines += ["", "Completed tasks:"]
        lines += [f"- {task}" for task in options.tasks]
    return "\n".join(lines)


class GitManager:
    """Runs git commands in a working directory."""

    def __init__(
        self,
        working_dir: Path | None = None,
        *,
        command_runner: CommandRunnerLike | None = None,
    ) -> None:
        """Initialize git manager.

        Args:
            working_dir: Directory to run git commands in. Defaults to cwd.
            command_runner: Runner used for git subprocesses.
        """
        self.working_dir = working_dir or Path.cwd()
        self._runner = command_runner or get_command_runner()

    def _run_git(self, command: str) -> str:
        """Run a git command line and return its stdout.

        Raises:
            GitCommandError: If the command cannot run or exits non-zero.
        """
        logger.debug("Running: %s", command)
        try:
            result = self._runner.run(
                command=command,
                domain=TimeoutDomain.GIT_OPERATION,
                cwd=self.working_dir,
                shell=True,
            )
        except (OSError, ValueError) as e:
            raise GitCommandError(command, -1, str(e)) from e

        if result.timed_out or result.effective_exit_code != 0:
            raise GitCommandError(
                command, result.effective_exit_code, result.stderr.strip()
            )
        return result.stdout

    def is_git_repository(self) -> bool:
        """Check if the working directory is inside a git repository."""
        try:
            self._run_git("git rev-parse --git-dir")
            return True
        except GitCommandError:
            return False

    def has_uncommitted_changes(self) -> bool:
        """Check for staged, unstaged or untracked changes."""
        try:
            return bool(self._run_git("git status --porcelain").strip())
        except GitCommandError as e:
            logger.error("Git status check failed: %s", e)
            return False

    def is_working_directory_clean(self) -> bool:
        return not self.has_uncommitted_changes()

    def get_current_branch(self) -> str:
        """Get the current branch name, or 'unknown' on failure."""
        try:
            return self._run_git("git rev-parse --abbrev-ref HEAD").strip()
        except GitCommandError as e:
            logger.error("Failed to read current branch: %s", e)
            return UNKNOWN_BRANCH

    def get_status(self) -> str:
        """Get short status output for display."""
        try:
            return self._run_git("git status --short").strip()
        except GitCommandError as e:
            logger.error("Failed to read git status: %s", e)
            return STATUS_UNAVAILABLE

    def create_commit(self, options: CommitOptions) -> bool:
        """Stage everything and commit it.

        Returns False without touching the index when there is nothing to
        commit, and False when any git step fails.
        """
        if not self.has_uncommitted_changes():
            logger.info("No changes to commit")
            return False

        message = build_commit_message(options)
        try:
            self._run_git("git add .")
            self._run_git(f'git commit -m "{escape_for_double_quotes(message)}"')
        except GitCommandError as e:
            logger.error("Git commit failed: %s", e)
            return False

        logger.info("Created commit: %s", message.splitlines()[0])
        return True

    def validate_git_setup(self) -> GitSetupStatus:
        """Collect repository, change and branch state in one snapshot."""
        if not self.is_git_repository():
            return GitSetupStatus(is_repo=False, has_changes=False, current_branch="")

        return GitSetupStatus(
            is_repo=True,
            has_changes=self.has_uncommitted_changes(),
            current_branch=self.get_current_branch(),
        )
