"""Authorization Evaluator - (caller, capability, resource) -> allow/deny.

Invariants:
    - Policies are registered per resource type; unregistered types are always denied
    - authorize() raises CapabilityDeniedError carrying the capability-specific message
    - visible() applies the VIEW capability to collections, so list and show agree

Design Decisions:
    - Protocol over ABC for policies: structural subtyping, no inheritance hierarchy
    - Resource types injected by the shell: core never imports ORM models
"""

from collections.abc import Iterable
from typing import Any, Protocol, TypeVar

from disaster_api.core.domain_types import Caller, Capability
from disaster_api.core.errors import CapabilityDeniedError, ErrorContext

T = TypeVar("T")

DENIAL_MESSAGES: dict[Capability, str] = {
    Capability.VIEW: "You are not allowed to see this resource",
    Capability.UPDATE: "You are not allowed to update this resource",
    Capability.DELETE: "You are not allowed to delete this resource",
    Capability.CHANGE_COUNT: "You are not allowed to update this resource",
}


class OwnedResource(Protocol):
    """Anything with an owning user."""
    user_id: int


class Policy(Protocol):
    """Contract for a per-resource-type policy."""
    def allows(self, caller: Caller, capability: Capability, resource: Any) -> bool: ...


class OwnershipPolicy:
    """Grants every capability to the owning user and nobody else."""

    def allows(
        self, caller: Caller, capability: Capability, resource: OwnedResource,
    ) -> bool:
        return resource.user_id == caller.user_id


class AuthorizationEvaluator:
    """Dispatches capability checks to the policy registered for the resource type."""

    def __init__(self, policies: dict[type, Policy] | None = None):
        self._policies: dict[type, Policy] = dict(policies or {})

    def register(self, resource_type: type, policy: Policy) -> None:
        self._policies[resource_type] = policy

    def policy_for(self, resource: Any) -> Policy | None:
        for klass in type(resource).__mro__:
            policy = self._policies.get(klass)
            if policy is not None:
                return policy
        return None

    def allows(self, caller: Caller, capability: Capability, resource: Any) -> bool:
        policy = self.policy_for(resource)
        if policy is None:
            return False
        return policy.allows(caller, capability, resource)

    def denies(self, caller: Caller, capability: Capability, resource: Any) -> bool:
        return not self.allows(caller, capability, resource)

    def authorize(
        self, caller: Caller, capability: Capability, resource: Any,
    ) -> None:
        """Raise CapabilityDeniedError unless the caller holds the capability."""
        if self.allows(caller, capability, resource):
            return
        raise CapabilityDeniedError(
            capability.value,
            DENIAL_MESSAGES[capability],
            ErrorContext(
                user_id=caller.user_id,
                disaster_id=getattr(resource, "id", None),
            ),
        )

    def visible(self, caller: Caller, resources: Iterable[T]) -> list[T]:
        return [r for r in resources if self.allows(caller, Capability.VIEW, r)]
