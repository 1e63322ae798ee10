"""Runtime primitives shared by verification hooks and git operations."""

from checkpilot.runtime.command_runner import (
    CommandResult,
    CommandRunner,
    CommandRunnerLike,
    get_command_runner,
)
from checkpilot.runtime.timeout_policy import (
    TimeoutDomain,
    TimeoutPolicy,
    TimeoutPolicyRegistry,
    get_timeout_policy_registry,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "CommandRunnerLike",
    "TimeoutDomain",
    "TimeoutPolicy",
    "TimeoutPolicyRegistry",
    "get_command_runner",
    "get_timeout_policy_registry",
]
