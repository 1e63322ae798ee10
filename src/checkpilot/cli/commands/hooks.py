"""Hooks command: detect and run verification hooks."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from checkpilot.config.settings import settings
from checkpilot.verify.hooks import VerificationHooks
from checkpilot.verify.models import HookKind, HookResult


def _render_results(results: list[HookResult]) -> Table:
    table = Table(title="Verification hooks")
    table.add_column("Hook", style="cyan")
    table.add_column("Command")
    table.add_column("Result")
    table.add_column("Confidence")
    table.add_column("Time", justify="right")
    for result in results:
        status = "[green]pass[/green]" if result.success else "[red]fail[/red]"
        table.add_row(
            result.hook.display_name,
            result.hook.command,
            status,
            result.confidence.value,
            f"{result.execution_time_ms}ms",
        )
    return table


def cmd_hooks(args: argparse.Namespace) -> int:
    """Detect hooks, optionally running them. Exit 1 if any run fails."""
    hooks = VerificationHooks(Path.cwd(), timeout_ms=settings.hook_timeout_ms)
    console = Console()

    if not args.run and args.hook_type is None:
        detected = hooks.detect_hooks()
        summary = hooks.get_hook_summary()
        if args.json:
            print(
                json.dumps(
                    {
                        "package_manager": detected.package_manager.value,
                        "has_manifest": detected.has_manifest,
                        "hooks": {h.kind.value: h.command for h in detected.hooks},
                        "unavailable": [kind.value for kind in summary.unavailable],
                    },
                    indent=2,
                )
            )
            return 0

        console.print(f"Package manager: {detected.package_manager.value}")
        for hook in detected.hooks:
            console.print(f"  [cyan]{hook.display_name}[/cyan]: {hook.command}")
        if summary.unavailable:
            missing = ", ".join(kind.value for kind in summary.unavailable)
            console.print(f"Unavailable: {missing}")
        return 0

    if args.hook_type is not None:
        single = hooks.run_hook_by_type(HookKind(args.hook_type))
        results = [single] if single is not None else []
    else:
        results = hooks.run_all_hooks()

    if args.json:
        print(json.dumps([result.to_dict() for result in results], indent=2))
    elif results:
        console.print(_render_results(results))
    else:
        console.print("No hooks detected")

    return 0 if all(result.success for result in results) else 1
