"""CLI entry: shared setup, then routing to a command handler."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from checkpilot.cli.commands import cmd_checklist, cmd_git_status, cmd_hooks
from checkpilot.cli.parser import build_parser, parse_args
from checkpilot.config.paths import reset_paths

logger = logging.getLogger(__name__)

CommandHandler = Callable[[argparse.Namespace], int]

COMMAND_HANDLERS: dict[str, CommandHandler] = {
    "checklist": cmd_checklist,
    "hooks": cmd_hooks,
    "git-status": cmd_git_status,
}


def dispatch(args: argparse.Namespace) -> int:
    """Run the handler for ``args.command``; print usage if there is none."""
    handler = COMMAND_HANDLERS.get(args.command or "")
    if handler is None:
        build_parser().print_help()
        return 1
    return handler(args)


def _enter_workdir(workdir: Path) -> None:
    target = workdir.resolve()
    target.mkdir(parents=True, exist_ok=True)
    os.chdir(target)
    # Workspace paths resolve against the new cwd.
    reset_paths()


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Parse ``argv``, apply --workdir and logging, then dispatch."""
    args = parse_args(argv)
    if args.workdir:
        _enter_workdir(args.workdir)
    if configure_logging is not None:
        configure_logging()

    logger.info("Running %s in %s", args.command or "help", Path.cwd())
    return dispatch(args)
