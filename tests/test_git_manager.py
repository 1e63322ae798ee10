"""Tests for GitManager and commit message construction."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest

from checkpilot.git import (
    CommitOptions,
    GitCommandError,
    GitManager,
    build_commit_message,
    escape_for_double_quotes,
)
from checkpilot.runtime.command_runner import CommandResult
from checkpilot.runtime.timeout_policy import TimeoutDomain


class _GitRunnerStub:
    """Answers git commands by prefix and records them."""

    def __init__(self, responses: dict[str, tuple[int, str]] | None = None) -> None:
        self._responses = responses or {}
        self.commands: list[str] = []
        self.domains: list[TimeoutDomain] = []

    def run(
        self,
        *,
        command: str | Sequence[str],
        domain: TimeoutDomain,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        shell: bool = False,
        requested_timeout_seconds: float | None = None,
    ) -> CommandResult:
        text = str(command)
        self.commands.append(text)
        self.domains.append(domain)
        exit_code, stdout = next(
            (
                response
                for prefix, response in self._responses.items()
                if text.startswith(prefix)
            ),
            (0, ""),
        )
        return CommandResult(
            domain=domain,
            command=text,
            timeout_seconds=30.0,
            duration_seconds=0.01,
            timed_out=False,
            exit_code=exit_code,
            stdout=stdout,
            stderr="fatal: stub" if exit_code else "",
        )


class _BrokenRunner:
    def run(self, **kwargs: object) -> CommandResult:
        raise FileNotFoundError("git not installed")


class _InvalidCommandRunner:
    def run(self, **kwargs: object) -> CommandResult:
        raise ValueError("embedded null byte")


class TestBuildCommitMessage:
    """Tests for commit message formatting."""

    def test_phase_with_project(self) -> None:
        message = build_commit_message(
            CommitOptions(tasks=["Add login"], phase="Auth", project_name="shop")
        )

        assert message == (
            "feat(shop): Auth\n"
            "\n"
            "Project: shop\n"
            "Phase: Auth\n"
            "\n"
            "Completed tasks:\n"
            "- Add login"
        )

    def test_task_count_without_phase(self) -> None:
        message = build_commit_message(CommitOptions(tasks=["a", "b", "c"]))

        assert message.splitlines()[0] == "feat: complete 3 tasks"
        assert message.endswith("- a\n- b\n- c")

    def test_single_task_is_singular(self) -> None:
        message = build_commit_message(CommitOptions(tasks=["only"]))
        assert message.splitlines()[0] == "feat: complete 1 task"

    def test_phase_without_project(self) -> None:
        message = build_commit_message(CommitOptions(phase="Setup"))
        assert message == "feat: Setup\n\nPhase: Setup"


class TestEscapeForDoubleQuotes:
    """Tests for shell escaping of commit messages."""

    def test_escapes_shell_specials(self) -> None:
        assert escape_for_double_quotes('say "hi"') == 'say \\"hi\\"'
        assert escape_for_double_quotes("cost $5") == "cost \\$5"
        assert escape_for_double_quotes("run `ls`") == "run \\`ls\\`"
        assert escape_for_double_quotes("a\\b") == "a\\\\b"

    def test_plain_text_unchanged(self) -> None:
        assert escape_for_double_quotes("Add login page") == "Add login page"


class TestGitManagerWithStub:
    """Tests for GitManager against a stubbed command runner."""

    def test_is_git_repository(self, tmp_path: Path) -> None:
        assert GitManager(tmp_path, command_runner=_GitRunnerStub()).is_git_repository()
        failing = _GitRunnerStub({"git rev-parse --git-dir": (128, "")})
        assert not GitManager(tmp_path, command_runner=failing).is_git_repository()

    def test_uses_git_timeout_domain(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub()

        GitManager(tmp_path, command_runner=runner).get_current_branch()

        assert runner.domains == [TimeoutDomain.GIT_OPERATION]

    def test_has_uncommitted_changes(self, tmp_path: Path) -> None:
        dirty = _GitRunnerStub({"git status --porcelain": (0, " M app.py\n")})
        clean = _GitRunnerStub({"git status --porcelain": (0, "\n")})

        assert GitManager(tmp_path, command_runner=dirty).has_uncommitted_changes()
        assert not GitManager(tmp_path, command_runner=clean).has_uncommitted_changes()
        assert GitManager(tmp_path, command_runner=clean).is_working_directory_clean()

    def test_status_failure_reads_as_clean(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub({"git status --porcelain": (128, "")})
        assert not GitManager(tmp_path, command_runner=runner).has_uncommitted_changes()

    def test_branch_and_status_fallbacks(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub(
            {"git rev-parse --abbrev-ref": (128, ""), "git status --short": (1, "")}
        )
        git = GitManager(tmp_path, command_runner=runner)

        assert git.get_current_branch() == "unknown"
        assert git.get_status() == "Unable to get git status"

    def test_branch_and_status_values(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub(
            {
                "git rev-parse --abbrev-ref": (0, "main\n"),
                "git status --short": (0, "?? new.txt\n"),
            }
        )
        git = GitManager(tmp_path, command_runner=runner)

        assert git.get_current_branch() == "main"
        assert git.get_status() == "?? new.txt"

    def test_create_commit_with_clean_tree(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub({"git status --porcelain": (0, "")})

        created = GitManager(tmp_path, command_runner=runner).create_commit(
            CommitOptions(tasks=["a"])
        )

        assert created is False
        assert runner.commands == ["git status --porcelain"]

    def test_create_commit_stages_and_commits(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub({"git status --porcelain": (0, "?? a.py\n")})

        created = GitManager(tmp_path, command_runner=runner).create_commit(
            CommitOptions(tasks=['Handle "quoted" input'], phase="Core")
        )

        assert created is True
        assert runner.commands[:2] == ["git status --porcelain", "git add ."]
        assert runner.commands[2].startswith('git commit -m "feat: Core')
        assert '- Handle \\"quoted\\" input"' in runner.commands[2]

    def test_create_commit_failure(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub(
            {"git status --porcelain": (0, "?? a.py\n"), "git commit": (1, "")}
        )

        created = GitManager(tmp_path, command_runner=runner).create_commit(
            CommitOptions(tasks=["a"])
        )

        assert created is False

    def test_validate_git_setup_outside_repo(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub({"git rev-parse --git-dir": (128, "")})

        status = GitManager(tmp_path, command_runner=runner).validate_git_setup()

        assert (status.is_repo, status.has_changes, status.current_branch) == (
            False,
            False,
            "",
        )
        assert runner.commands == ["git rev-parse --git-dir"]

    def test_validate_git_setup_in_repo(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub(
            {
                "git status --porcelain": (0, " M x\n"),
                "git rev-parse --abbrev-ref": (0, "feature\n"),
            }
        )

        status = GitManager(tmp_path, command_runner=runner).validate_git_setup()

        assert status.is_repo is True
        assert status.has_changes is True
        assert status.current_branch == "feature"

    def test_spawn_failure_degrades(self, tmp_path: Path) -> None:
        git = GitManager(tmp_path, command_runner=_BrokenRunner())

        assert git.is_git_repository() is False
        assert git.get_current_branch() == "unknown"
        assert git.create_commit(CommitOptions(tasks=["a"])) is False

    def test_unspawnable_command_degrades(self, tmp_path: Path) -> None:
        git = GitManager(tmp_path, command_runner=_InvalidCommandRunner())

        assert git.is_git_repository() is False
        assert git.create_commit(CommitOptions(tasks=["a"])) is False

    def test_run_git_raises_command_error(self, tmp_path: Path) -> None:
        runner = _GitRunnerStub({"git log": (128, "")})
        git = GitManager(tmp_path, command_runner=runner)

        with pytest.raises(GitCommandError) as exc_info:
            git._run_git("git log")

        assert exc_info.value.exit_code == 128
        assert exc_info.value.output == "fatal: stub"


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestGitManagerWithRepository:
    """Tests against a real git repository."""

    def _init_repo(self, path: Path) -> None:
        subprocess.run(["git", "init"], cwd=path, capture_output=True)
        subprocess.run(
            ["git", "config", "user.email", "test@test.com"],
            cwd=path,
            capture_output=True,
        )
        subprocess.run(
            ["git", "config", "user.name", "Test"],
            cwd=path,
            capture_output=True,
        )
        subprocess.run(
            ["git", "config", "commit.gpgsign", "false"],
            cwd=path,
            capture_output=True,
        )

    def test_not_a_repository(self, tmp_path: Path) -> None:
        status = GitManager(tmp_path).validate_git_setup()
        assert status.is_repo is False

    def test_commit_round_trip(self, tmp_path: Path) -> None:
        self._init_repo(tmp_path)
        (tmp_path / "app.py").write_text("print('hi')\n")
        git = GitManager(tmp_path)

        assert git.has_uncommitted_changes() is True
        created = git.create_commit(
            CommitOptions(
                tasks=['Print "hi" for $USER'],
                phase="Bootstrap",
                project_name="demo",
            )
        )

        assert created is True
        assert git.is_working_directory_clean() is True
        log = subprocess.run(
            ["git", "log", "-1", "--format=%B"],
            cwd=tmp_path,
            capture_output=True,
            text=True,
        ).stdout
        assert log.startswith("feat(demo): Bootstrap\n")
        assert '- Print "hi" for $USER' in log

    def test_nothing_to_commit(self, tmp_path: Path) -> None:
        self._init_repo(tmp_path)

        assert GitManager(tmp_path).create_commit(CommitOptions(tasks=["a"])) is False

    def test_null_byte_in_task_fails_commit(self, tmp_path: Path) -> None:
        self._init_repo(tmp_path)
        (tmp_path / "app.py").write_text("print('hi')\n")

        created = GitManager(tmp_path).create_commit(
            CommitOptions(tasks=["bad\x00task"])
        )

        assert created is False
