"""Time limits for external commands, one policy per command domain."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class TimeoutDomain(str, Enum):
    """Who is running the command."""

    VERIFICATION_HOOK = "verification_hook"  # project test/build/lint/typecheck
    GIT_OPERATION = "git_operation"


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """Limits and stop behaviour for one domain."""

    domain: TimeoutDomain
    default_timeout_seconds: float
    min_timeout_seconds: float
    max_timeout_seconds: float
    use_process_group: bool  # signal the whole session, not just the child
    terminate_grace_seconds: float  # between SIGTERM and SIGKILL

    def clamp(self, seconds: float) -> float:
        """Keep ``seconds`` within this policy's bounds."""
        return min(max(seconds, self.min_timeout_seconds), self.max_timeout_seconds)


DEFAULT_POLICIES: tuple[TimeoutPolicy, ...] = (
    TimeoutPolicy(
        domain=TimeoutDomain.VERIFICATION_HOOK,
        default_timeout_seconds=60.0,
        min_timeout_seconds=0.01,
        max_timeout_seconds=86400.0,  # one day
        use_process_group=True,
        terminate_grace_seconds=2.0,
    ),
    TimeoutPolicy(
        domain=TimeoutDomain.GIT_OPERATION,
        default_timeout_seconds=30.0,
        min_timeout_seconds=3.0,
        max_timeout_seconds=300.0,
        use_process_group=False,
        terminate_grace_seconds=3.0,
    ),
)


class TimeoutPolicyRegistry:
    """Looks up domain policies and resolves the limit for a single run."""

    def __init__(
        self, policies: Mapping[TimeoutDomain, TimeoutPolicy] | None = None
    ) -> None:
        if policies is None:
            policies = {policy.domain: policy for policy in DEFAULT_POLICIES}
        self._policies = dict(policies)

    def policy_for(self, domain: TimeoutDomain) -> TimeoutPolicy:
        return self._policies[domain]

    def timeout_for(
        self,
        domain: TimeoutDomain,
        requested_timeout_seconds: float | None = None,
    ) -> float:
        """Requested limit, or the domain default, clamped to the policy."""
        policy = self.policy_for(domain)
        if requested_timeout_seconds is None:
            return policy.clamp(policy.default_timeout_seconds)
        return policy.clamp(requested_timeout_seconds)


_registry = TimeoutPolicyRegistry()


def get_timeout_policy_registry() -> TimeoutPolicyRegistry:
    return _registry
