"""Checklist command: show the checklist resolved for a prompt file."""

from __future__ import annotations

import argparse
import json
import sys

from rich.console import Console
from rich.table import Table

from checkpilot.checklist.models import ParsedChecklist
from checkpilot.checklist.parser import ChecklistParser
from checkpilot.config.settings import settings
from checkpilot.orchestration.task_flow import resolve_checklist


def render_checklist(checklist: ParsedChecklist, source: str) -> Table:
    """Build a rich table of checklist items."""
    table = Table(title=f"Checklist ({source}, {checklist.total_items} items)")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Group")
    table.add_column("Item")
    table.add_column("Verification", style="magenta")
    for item in checklist.all_items():
        table.add_row(
            item.id,
            item.group or "",
            item.content,
            item.verification_type.value,
        )
    return table


def cmd_checklist(args: argparse.Namespace) -> int:
    """Print the checklist for a prompt file."""
    try:
        content = args.file.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: Could not read {args.file}: {e}", file=sys.stderr)
        return 1

    intent = args.intent or settings.default_intent
    checklist, source = resolve_checklist(content, intent)

    if args.json:
        payload = checklist.to_dict()
        payload["source"] = source
        print(json.dumps(payload, indent=2))
        return 0

    summary = ChecklistParser().get_summary(checklist)
    console = Console()
    console.print(render_checklist(checklist, source))
    console.print(
        f"automated: {summary.automated}  "
        f"semi-automated: {summary.semi_automated}  "
        f"manual: {summary.manual}"
    )
    return 0
