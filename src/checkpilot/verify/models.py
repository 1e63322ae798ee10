"""Data models for verification hooks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_HOOK_TIMEOUT_MS = 60000


class HookKind(str, Enum):
    """Kinds of automatable verification commands."""

    TEST = "test"
    BUILD = "build"
    LINT = "lint"
    TYPECHECK = "typecheck"
    CUSTOM = "custom"


class PackageManager(str, Enum):
    """Package manager inferred from lock files."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    UNKNOWN = "unknown"


class Confidence(str, Enum):
    """Certainty attached to a hook's pass/fail determination."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True, slots=True)
class VerificationHook:
    """A concrete command that verifies one aspect of the project.

    ``timeout_ms`` is capped at one day (86,400,000 ms) when the hook runs.
    """

    kind: HookKind
    display_name: str
    command: str
    success_pattern: str | None = None
    failure_pattern: str | None = None
    timeout_ms: int = DEFAULT_HOOK_TIMEOUT_MS


@dataclass(frozen=True, slots=True)
class HookResult:
    """Outcome of one hook run."""

    hook: VerificationHook
    success: bool
    exit_code: int  # -1 when the process never produced an exit status
    output: str
    confidence: Confidence
    execution_time_ms: int
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.hook.kind.value,
            "command": self.hook.command,
            "success": self.success,
            "exit_code": self.exit_code,
            "confidence": self.confidence.value,
            "execution_time_ms": self.execution_time_ms,
            "error": self.error,
            "output": self.output,
        }


@dataclass(slots=True)
class DetectedHooks:
    """Hooks found in a project plus the detection context."""

    hooks: list[VerificationHook] = field(default_factory=list)
    package_manager: PackageManager = PackageManager.UNKNOWN
    has_manifest: bool = False


@dataclass(frozen=True, slots=True)
class HookSummary:
    """Known hook kinds split by availability."""

    available: list[HookKind]
    unavailable: list[HookKind]
