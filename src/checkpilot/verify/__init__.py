"""Verification hooks: detect and run a project's own check commands."""

from checkpilot.verify.definitions import HOOK_DEFINITIONS, HookDefinition
from checkpilot.verify.hooks import VerificationHooks
from checkpilot.verify.models import (
    Confidence,
    DetectedHooks,
    HookKind,
    HookResult,
    HookSummary,
    PackageManager,
    VerificationHook,
)

__all__ = [
    "Confidence",
    "DetectedHooks",
    "HOOK_DEFINITIONS",
    "HookDefinition",
    "HookKind",
    "HookResult",
    "HookSummary",
    "PackageManager",
    "VerificationHook",
    "VerificationHooks",
]
