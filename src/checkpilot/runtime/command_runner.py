"""Run external commands under per-domain time limits.

Verification hooks and git both go through :class:`CommandRunner`. A run
that outlives its limit gets SIGTERM, then SIGKILL once the policy's grace
period has passed. Domains that use a process group start the command in a
new session so the signals also reach whatever the shell spawned.
"""

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from checkpilot.runtime.timeout_policy import (
    TimeoutDomain,
    TimeoutPolicyRegistry,
    get_timeout_policy_registry,
)

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124  # same as coreutils timeout(1)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """What one command run produced."""

    domain: TimeoutDomain
    command: str
    timeout_seconds: float
    duration_seconds: float
    timed_out: bool
    exit_code: int | None  # None when the run was stopped
    stdout: str
    stderr: str
    signal_sequence: tuple[str, ...] = ()

    @property
    def output(self) -> str:
        """stdout followed by stderr, surrounding whitespace removed."""
        return f"{self.stdout}{self.stderr}".strip()

    @property
    def effective_exit_code(self) -> int:
        """Exit status, with stopped runs reported as 124."""
        if self.exit_code is None:
            return TIMEOUT_EXIT_CODE if self.timed_out else 1
        return self.exit_code


class CommandRunnerLike(Protocol):
    """Anything that can stand in for CommandRunner."""

    def run(
        self,
        *,
        command: str | Sequence[str],
        domain: TimeoutDomain,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        shell: bool = False,
        requested_timeout_seconds: float | None = None,
    ) -> CommandResult: ...


class CommandRunner:
    """Executes commands within the time limit of their domain."""

    def __init__(self, *, policy_registry: TimeoutPolicyRegistry | None = None) -> None:
        self._registry = policy_registry or get_timeout_policy_registry()

    def run(
        self,
        *,
        command: str | Sequence[str],
        domain: TimeoutDomain,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        shell: bool = False,
        requested_timeout_seconds: float | None = None,
    ) -> CommandResult:
        """Run ``command`` once and wait for it, stopping it at the limit.

        Raises:
            OSError: If the process cannot be started.
        """
        policy = self._registry.policy_for(domain)
        limit = self._registry.timeout_for(domain, requested_timeout_seconds)
        own_session = policy.use_process_group and os.name != "nt"
        display = (
            command if isinstance(command, str) else shlex.join(map(str, command))
        )
        logger.debug("[%s] %s (limit %.2fs)", domain.value, display, limit)

        started = time.monotonic()
        process = subprocess.Popen(
            command,
            shell=shell,
            cwd=None if cwd is None else Path(cwd).resolve(),
            env=None if env is None else dict(env),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            start_new_session=own_session,
        )

        timed_out = False
        sent: tuple[str, ...] = ()
        try:
            stdout, stderr = process.communicate(timeout=limit)
        except subprocess.TimeoutExpired:
            timed_out = True
            logger.warning(
                "[%s] timed out after %.2fs: %s", domain.value, limit, display
            )
            stdout, stderr, sent = _stop(
                process,
                own_session=own_session,
                grace_seconds=policy.terminate_grace_seconds,
            )

        return CommandResult(
            domain=domain,
            command=display,
            timeout_seconds=limit,
            duration_seconds=time.monotonic() - started,
            timed_out=timed_out,
            exit_code=None if timed_out else process.returncode,
            stdout=_as_text(stdout),
            stderr=_as_text(stderr),
            signal_sequence=sent,
        )


def _stop(
    process: subprocess.Popen[str],
    *,
    own_session: bool,
    grace_seconds: float,
) -> tuple[str, str, tuple[str, ...]]:
    """Terminate, then kill after the grace period.

    Returns everything the process wrote plus the names of signals sent.
    Waiting is bounded: if the pipes are still held open after SIGKILL
    (by a process that left the group), they are closed and whatever was
    read so far is returned.
    """
    sent: list[str] = []
    if _deliver(process, signal.SIGTERM, own_session):
        sent.append("SIGTERM")
    try:
        stdout, stderr = process.communicate(timeout=grace_seconds)
    except subprocess.TimeoutExpired:
        if _deliver(process, signal.SIGKILL, own_session):
            sent.append("SIGKILL")
        try:
            stdout, stderr = process.communicate(timeout=grace_seconds)
        except subprocess.TimeoutExpired as e:
            logger.warning("Pipes of pid %d still open after SIGKILL", process.pid)
            stdout, stderr = e.stdout, e.stderr
            _close_pipes(process)
            process.wait()
    return _as_text(stdout), _as_text(stderr), tuple(sent)


def _deliver(
    process: subprocess.Popen[str], sig: signal.Signals, own_session: bool
) -> bool:
    """Send ``sig`` to the process or its session; False if nothing received it.

    The session is signalled even after its leader exits, since children
    it started in the background may still hold the output pipes.
    """
    try:
        if own_session:
            os.killpg(process.pid, sig)
        elif process.poll() is None:
            process.send_signal(sig)
        else:
            return False
    except ProcessLookupError:
        return False
    except OSError as e:
        logger.warning("Could not send %s to pid %d: %s", sig.name, process.pid, e)
        return False
    return True


def _close_pipes(process: subprocess.Popen[str]) -> None:
    for stream in (process.stdout, process.stderr):
        if stream is not None:
            stream.close()


def _as_text(data: str | bytes | None) -> str:
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data or ""


_shared_runner: CommandRunner | None = None


def get_command_runner() -> CommandRunner:
    """Shared runner using the default timeout policies."""
    global _shared_runner
    if _shared_runner is None:
        _shared_runner = CommandRunner()
    return _shared_runner
