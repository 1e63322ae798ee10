"""CLI command handlers."""

from .checklist import cmd_checklist
from .git_status import cmd_git_status
from .hooks import cmd_hooks

__all__ = [
    "cmd_checklist",
    "cmd_git_status",
    "cmd_hooks",
]
