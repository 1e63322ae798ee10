"""Argument parser construction for the checkpilot CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from checkpilot.checklist.generator import PromptIntent
from checkpilot.verify.models import HookKind


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        description="checkpilot - checklists, verification hooks and commit cadence"
    )
    parser.add_argument(
        "--workdir",
        "-w",
        type=Path,
        help="Project directory to operate on (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Checklist command
    checklist_parser = subparsers.add_parser(
        "checklist",
        help="Extract (or generate) the checklist for a prompt file",
    )
    checklist_parser.add_argument(
        "file",
        type=Path,
        help="Markdown prompt file to read",
    )
    checklist_parser.add_argument(
        "--intent",
        "-i",
        choices=[intent.value for intent in PromptIntent],
        help="Intent used when the file has no checklist (default: from settings)",
    )
    checklist_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the checklist as JSON",
    )

    # Hooks command
    hooks_parser = subparsers.add_parser(
        "hooks",
        help="Detect (and optionally run) verification hooks",
    )
    hooks_parser.add_argument(
        "--run",
        action="store_true",
        help="Run the detected hooks",
    )
    hooks_parser.add_argument(
        "--type",
        "-t",
        dest="hook_type",
        choices=[kind.value for kind in HookKind if kind is not HookKind.CUSTOM],
        help="Only run hooks of this kind (implies --run)",
    )
    hooks_parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )

    # Git status command
    git_parser = subparsers.add_parser(
        "git-status",
        help="Show repository, change and branch state",
    )
    git_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the snapshot as JSON",
    )

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
