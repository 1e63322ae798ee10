"""Git status command."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from checkpilot.git.service import GitManager


def cmd_git_status(args: argparse.Namespace) -> int:
    """Print the repository snapshot used before committing."""
    git = GitManager(Path.cwd())
    setup = git.validate_git_setup()

    if args.json:
        print(
            json.dumps(
                {
                    "is_repo": setup.is_repo,
                    "has_changes": setup.has_changes,
                    "current_branch": setup.current_branch,
                },
                indent=2,
            )
        )
        return 0

    if not setup.is_repo:
        print("Not a git repository")
        return 0

    print(f"Branch: {setup.current_branch}")
    if setup.has_changes:
        print(git.get_status())
    else:
        print("Working tree clean")
    return 0
