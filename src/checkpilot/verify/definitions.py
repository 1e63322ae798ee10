"""Built-in hook definitions.

Each kind carries the patterns used to read its output. Failure patterns
are ordered; a pattern whose first group captured exactly ``"0"`` (for
example ``0 errors``) does not count as a failure. The generic ``error``
patterns skip a preceding ``0 `` so zero-count summaries stay clean.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from checkpilot.verify.models import HookKind

_ERROR_WORD = r"(?<!\b0\s)\berrors?\b"


@dataclass(frozen=True, slots=True)
class HookDefinition:
    """Static description of a hook kind."""

    display_name: str
    commands: tuple[str, ...]  # Reference invocations, informational only
    success_patterns: tuple[re.Pattern[str], ...]
    failure_patterns: tuple[re.Pattern[str], ...]


HOOK_DEFINITIONS: dict[HookKind, HookDefinition] = {
    HookKind.TEST: HookDefinition(
        display_name="Tests",
        commands=("npm test", "npm run test", "yarn test", "pnpm test"),
        success_patterns=(
            re.compile(r"(\d+)\s+(passing|passed)", re.IGNORECASE),
            re.compile(r"tests?\s+passed", re.IGNORECASE),
            re.compile(r"all\s+tests?\s+passed", re.IGNORECASE),
            re.compile(r"0\s+failed", re.IGNORECASE),
            re.compile(r"test\s+suites?:\s+\d+\s+passed", re.IGNORECASE),
        ),
        failure_patterns=(
            re.compile(r"(\d+)\s+failed", re.IGNORECASE),
            re.compile(r"test\s+failed", re.IGNORECASE),
            re.compile(r"\bFAIL\b"),
            re.compile(_ERROR_WORD, re.IGNORECASE),
        ),
    ),
    HookKind.BUILD: HookDefinition(
        display_name="Build",
        commands=("npm run build", "yarn build", "pnpm build", "tsc"),
        success_patterns=(
            re.compile(r"successfully", re.IGNORECASE),
            re.compile(r"done", re.IGNORECASE),
            re.compile(r"built", re.IGNORECASE),
            re.compile(r"compiled", re.IGNORECASE),
        ),
        failure_patterns=(
            re.compile(_ERROR_WORD, re.IGNORECASE),
            re.compile(r"\bfailed\b", re.IGNORECASE),
            re.compile(r"TS\d{4}:"),
        ),
    ),
    HookKind.LINT: HookDefinition(
        display_name="Lint",
        commands=("npm run lint", "yarn lint", "pnpm lint", "eslint ."),
        success_patterns=(
            re.compile(r"0\s+errors?", re.IGNORECASE),
            re.compile(r"no\s+errors?", re.IGNORECASE),
            re.compile(r"all\s+files?\s+pass", re.IGNORECASE),
        ),
        failure_patterns=(
            re.compile(r"(\d+)\s+errors?", re.IGNORECASE),
            re.compile(r"(?<!\bno\s)" + _ERROR_WORD, re.IGNORECASE),
        ),
    ),
    HookKind.TYPECHECK: HookDefinition(
        display_name="Type Check",
        commands=("tsc --noEmit", "npm run typecheck", "yarn typecheck"),
        # tsc prints nothing on success
        success_patterns=(re.compile(r"^$"),),
        failure_patterns=(
            re.compile(r"error\s+TS\d{4}", re.IGNORECASE),
            re.compile(r"Type\s+error", re.IGNORECASE),
        ),
    ),
    HookKind.CUSTOM: HookDefinition(
        display_name="Custom",
        commands=(),
        success_patterns=(),
        failure_patterns=(),
    ),
}


def get_definition(kind: HookKind) -> HookDefinition:
    return HOOK_DEFINITIONS[kind]
