"""Architecture guardrails for package layering."""

from __future__ import annotations

import ast
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src" / "checkpilot"

CORE_PACKAGES = ("checklist", "verify", "git", "runtime", "config")


def _imported_modules(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            modules.add(node.module)
    return modules


def _core_modules() -> list[Path]:
    return [
        path
        for package in CORE_PACKAGES
        for path in sorted((SRC_ROOT / package).rglob("*.py"))
    ]


def test_core_packages_do_not_import_outer_layers() -> None:
    """Core logic must stay usable without the CLI or orchestration."""
    violations: list[str] = []
    for path in _core_modules():
        for module in _imported_modules(path):
            if module.startswith(("checkpilot.cli", "checkpilot.orchestration")):
                violations.append(f"{path.relative_to(SRC_ROOT)}: {module}")

    assert not violations, "Core modules import outer layers:\n" + "\n".join(
        violations
    )


def test_only_runtime_spawns_processes() -> None:
    """Subprocesses go through the shared command runner."""
    offenders = [
        str(path.relative_to(SRC_ROOT))
        for path in sorted(SRC_ROOT.rglob("*.py"))
        if "subprocess" in _imported_modules(path)
        and path.parent.name != "runtime"
    ]

    assert offenders == []


def test_main_module_stays_thin() -> None:
    """Command logic lives in cli.commands, not in main."""
    tree = ast.parse((SRC_ROOT / "main.py").read_text(encoding="utf-8"))
    functions = {
        node.name for node in tree.body if isinstance(node, ast.FunctionDef)
    }

    assert functions == {"setup_logging", "main"}
