"""Detection and execution of project verification hooks.

Hooks are the project's own test/build/lint/typecheck commands, discovered
from ``package.json`` scripts. Running a hook only relays the process
outcome: exit status plus pattern matches on its output decide success,
and a confidence level records how clear that decision was.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path

from checkpilot.runtime.command_runner import CommandRunnerLike, get_command_runner
from checkpilot.runtime.timeout_policy import TimeoutDomain
from checkpilot.verify.definitions import HookDefinition, get_definition
from checkpilot.verify.models import (
    DEFAULT_HOOK_TIMEOUT_MS,
    Confidence,
    DetectedHooks,
    HookKind,
    HookResult,
    HookSummary,
    PackageManager,
    VerificationHook,
)

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
TSCONFIG_FILE = "tsconfig.json"

# Checked in order; the first lock file present wins.
LOCK_FILES: tuple[tuple[str, PackageManager], ...] = (
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("yarn.lock", PackageManager.YARN),
    ("package-lock.json", PackageManager.NPM),
)

TYPECHECK_SCRIPTS = ("typecheck", "type-check")
TSC_FALLBACK_COMMAND = "npx tsc --noEmit"

SUMMARY_KINDS = (HookKind.TEST, HookKind.BUILD, HookKind.LINT, HookKind.TYPECHECK)

HOOK_ENV_OVERRIDES = {"CI": "true", "FORCE_COLOR": "0", "NO_COLOR": "1"}


def determine_success(definition: HookDefinition, exit_code: int, output: str) -> bool:
    """Exit status first, then failure patterns; ``0 <thing>`` is exempt."""
    if exit_code != 0:
        return False

    for pattern in definition.failure_patterns:
        match = pattern.search(output)
        if match is None:
            continue
        if pattern.groups and match.group(1) == "0":
            continue
        return False

    return True


def determine_confidence(
    definition: HookDefinition, exit_code: int, output: str, success: bool
) -> Confidence:
    if exit_code == 0 and success:
        if any(pattern.search(output) for pattern in definition.success_patterns):
            return Confidence.HIGH
        return Confidence.MEDIUM

    if any(pattern.search(output) for pattern in definition.failure_patterns):
        return Confidence.HIGH
    return Confidence.MEDIUM


class VerificationHooks:
    """Detects and runs verification hooks for one project directory.

    Detection runs once per instance; create a new instance to rescan.
    """

    def __init__(
        self,
        cwd: Path | None = None,
        *,
        command_runner: CommandRunnerLike | None = None,
        timeout_ms: int = DEFAULT_HOOK_TIMEOUT_MS,
    ) -> None:
        self.cwd = cwd or Path.cwd()
        self._runner = command_runner or get_command_runner()
        self._timeout_ms = timeout_ms
        self._detected: DetectedHooks | None = None

    # --- Detection ---

    def detect_hooks(self) -> DetectedHooks:
        """Detect available hooks from the project manifest."""
        if self._detected is not None:
            return self._detected

        manifest_path = self.cwd / MANIFEST_FILE
        has_manifest = manifest_path.exists()
        package_manager = self._detect_package_manager()
        hooks: list[VerificationHook] = []

        if has_manifest:
            scripts = self._read_scripts(manifest_path)
            hooks = self._hooks_from_scripts(scripts, package_manager)

        self._detected = DetectedHooks(
            hooks=hooks,
            package_manager=package_manager,
            has_manifest=has_manifest,
        )
        logger.info(
            "Detected %d hook(s) in %s (package manager: %s)",
            len(hooks),
            self.cwd,
            package_manager.value,
        )
        return self._detected

    def _detect_package_manager(self) -> PackageManager:
        for lock_file, manager in LOCK_FILES:
            if (self.cwd / lock_file).exists():
                return manager
        return PackageManager.UNKNOWN

    def _read_scripts(self, manifest_path: Path) -> dict[str, str]:
        try:
            data = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", manifest_path, e)
            return {}

        scripts = data.get("scripts") if isinstance(data, dict) else None
        if not isinstance(scripts, dict):
            return {}
        return {
            str(name): str(command) for name, command in scripts.items() if command
        }

    def _hooks_from_scripts(
        self, scripts: dict[str, str], package_manager: PackageManager
    ) -> list[VerificationHook]:
        # "unknown" is used verbatim as the runner when no lock file exists.
        runner = package_manager.value
        hooks: list[VerificationHook] = []

        if "test" in scripts:
            hooks.append(self._create_hook(HookKind.TEST, f"{runner} test"))
        if "build" in scripts:
            hooks.append(self._create_hook(HookKind.BUILD, f"{runner} run build"))
        if "lint" in scripts:
            hooks.append(self._create_hook(HookKind.LINT, f"{runner} run lint"))

        typecheck_script = next(
            (name for name in TYPECHECK_SCRIPTS if name in scripts), None
        )
        if typecheck_script is not None:
            hooks.append(
                self._create_hook(
                    HookKind.TYPECHECK, f"{runner} run {typecheck_script}"
                )
            )
        elif (self.cwd / TSCONFIG_FILE).exists():
            hooks.append(self._create_hook(HookKind.TYPECHECK, TSC_FALLBACK_COMMAND))

        return hooks

    def _create_hook(self, kind: HookKind, command: str) -> VerificationHook:
        definition = get_definition(kind)
        return VerificationHook(
            kind=kind,
            display_name=definition.display_name,
            command=command,
            success_pattern=(
                definition.success_patterns[0].pattern
                if definition.success_patterns
                else None
            ),
            failure_pattern=(
                definition.failure_patterns[0].pattern
                if definition.failure_patterns
                else None
            ),
            timeout_ms=self._timeout_ms,
        )

    # --- Execution ---

    def run_hook(self, hook: VerificationHook) -> HookResult:
        """Run one hook and classify its outcome. Never raises."""
        definition = get_definition(hook.kind)
        env = {**os.environ, **HOOK_ENV_OVERRIDES}
        started_at = time.perf_counter()

        try:
            result = self._runner.run(
                command=hook.command,
                domain=TimeoutDomain.VERIFICATION_HOOK,
                cwd=self.cwd,
                env=env,
                shell=True,
                requested_timeout_seconds=hook.timeout_ms / 1000,
            )
        except (OSError, ValueError) as e:
            logger.error("Failed to start hook %s: %s", hook.kind.value, e)
            return HookResult(
                hook=hook,
                success=False,
                exit_code=-1,
                output="",
                confidence=Confidence.LOW,
                execution_time_ms=_elapsed_ms(started_at),
                error=str(e),
            )

        output = result.output
        if result.timed_out:
            logger.warning(
                "Hook %s timed out after %dms", hook.kind.value, hook.timeout_ms
            )
            return HookResult(
                hook=hook,
                success=False,
                exit_code=-1,
                output=output,
                confidence=Confidence.LOW,
                execution_time_ms=_elapsed_ms(started_at),
                error=f"Command timed out after {hook.timeout_ms}ms",
            )

        exit_code = result.effective_exit_code
        success = determine_success(definition, exit_code, output)
        confidence = determine_confidence(definition, exit_code, output, success)
        logger.info(
            "Hook %s finished: exit=%d success=%s confidence=%s",
            hook.kind.value,
            exit_code,
            success,
            confidence.value,
        )
        return HookResult(
            hook=hook,
            success=success,
            exit_code=exit_code,
            output=output,
            confidence=confidence,
            execution_time_ms=_elapsed_ms(started_at),
        )

    def run_all_hooks(self) -> list[HookResult]:
        """Run every detected hook one after another."""
        return [self.run_hook(hook) for hook in self.detect_hooks().hooks]

    def run_hook_by_type(self, kind: HookKind) -> HookResult | None:
        hook = self.get_hook(kind)
        if hook is None:
            return None
        return self.run_hook(hook)

    # --- Lookup ---

    def get_hook(self, kind: HookKind) -> VerificationHook | None:
        return next(
            (hook for hook in self.detect_hooks().hooks if hook.kind == kind), None
        )

    def has_hook(self, kind: HookKind) -> bool:
        return self.get_hook(kind) is not None

    def get_hook_summary(self) -> HookSummary:
        """Split test/build/lint/typecheck by whether a hook was detected."""
        detected_kinds = [hook.kind for hook in self.detect_hooks().hooks]
        return HookSummary(
            available=detected_kinds,
            unavailable=[kind for kind in SUMMARY_KINDS if kind not in detected_kinds],
        )


def _elapsed_ms(started_at: float) -> int:
    return int((time.perf_counter() - started_at) * 1000)
