from __future__ import annotations

from pathlib import Path

import pytest

from checkpilot.cli.parser import parse_args


def test_parse_args_without_command() -> None:
    args = parse_args([])
    assert args.command is None
    assert args.workdir is None


def test_parse_args_checklist() -> None:
    args = parse_args(
        ["--workdir", "proj", "checklist", "prompt.md", "--intent", "testing", "--json"]
    )
    assert args.command == "checklist"
    assert args.workdir == Path("proj")
    assert args.file == Path("prompt.md")
    assert args.intent == "testing"
    assert args.json is True


def test_parse_args_checklist_rejects_unknown_intent() -> None:
    with pytest.raises(SystemExit):
        _ = parse_args(["checklist", "prompt.md", "--intent", "dancing"])


def test_parse_args_hooks_defaults() -> None:
    args = parse_args(["hooks"])
    assert args.command == "hooks"
    assert args.run is False
    assert args.hook_type is None
    assert args.json is False


def test_parse_args_hooks_type() -> None:
    args = parse_args(["hooks", "--type", "lint"])
    assert args.hook_type == "lint"


def test_parse_args_hooks_rejects_custom_type() -> None:
    with pytest.raises(SystemExit):
        _ = parse_args(["hooks", "--type", "custom"])


def test_parse_args_git_status() -> None:
    args = parse_args(["git-status", "--json"])
    assert args.command == "git-status"
    assert args.json is True
