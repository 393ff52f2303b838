"""Authorization Evaluator - ownership policy, dispatch by type, denial messages."""

from dataclasses import dataclass

import pytest

from disaster_api.core.authorization import (
    DENIAL_MESSAGES, AuthorizationEvaluator, OwnershipPolicy,
)
from disaster_api.core.domain_types import Caller, Capability, UserId
from disaster_api.core.errors import CapabilityDeniedError


@dataclass
class _Location:
    id: int
    user_id: int


@dataclass
class _SpecialLocation(_Location):
    pass


@dataclass
class _Unregistered:
    id: int
    user_id: int


OWNER = Caller(UserId(1))
STRANGER = Caller(UserId(2))


def _evaluator() -> AuthorizationEvaluator:
    return AuthorizationEvaluator({_Location: OwnershipPolicy()})


@pytest.mark.parametrize("capability", list(Capability))
def test_owner_holds_every_capability(capability):
    assert _evaluator().allows(OWNER, capability, _Location(id=1, user_id=1))


@pytest.mark.parametrize("capability", list(Capability))
def test_stranger_holds_no_capability(capability):
    evaluator = _evaluator()
    resource = _Location(id=1, user_id=1)
    assert not evaluator.allows(STRANGER, capability, resource)
    assert evaluator.denies(STRANGER, capability, resource)


def test_unregistered_type_is_denied():
    evaluator = _evaluator()
    assert not evaluator.allows(OWNER, Capability.VIEW, _Unregistered(id=1, user_id=1))


def test_policy_found_through_subclass():
    evaluator = _evaluator()
    assert evaluator.allows(OWNER, Capability.UPDATE, _SpecialLocation(id=1, user_id=1))


def test_register_adds_policy_after_construction():
    evaluator = AuthorizationEvaluator()
    resource = _Unregistered(id=1, user_id=1)
    assert not evaluator.allows(OWNER, Capability.VIEW, resource)
    evaluator.register(_Unregistered, OwnershipPolicy())
    assert evaluator.allows(OWNER, Capability.VIEW, resource)


def test_authorize_passes_silently_for_owner():
    _evaluator().authorize(OWNER, Capability.DELETE, _Location(id=1, user_id=1))


@pytest.mark.parametrize("capability, message", [
    (Capability.VIEW, "You are not allowed to see this resource"),
    (Capability.UPDATE, "You are not allowed to update this resource"),
    (Capability.DELETE, "You are not allowed to delete this resource"),
    (Capability.CHANGE_COUNT, "You are not allowed to update this resource"),
])
def test_authorize_raises_with_tailored_message(capability, message):
    with pytest.raises(CapabilityDeniedError) as exc_info:
        _evaluator().authorize(STRANGER, capability, _Location(id=9, user_id=1))
    err = exc_info.value
    assert err.http_status == 403
    assert err.message == message == DENIAL_MESSAGES[capability]
    assert err.capability == capability.value
    assert err.context.disaster_id == 9
    assert err.context.user_id == 2


def test_visible_filters_by_view_capability():
    rows = [
        _Location(id=1, user_id=1),
        _Location(id=2, user_id=2),
        _Location(id=3, user_id=1),
    ]
    assert [r.id for r in _evaluator().visible(OWNER, rows)] == [1, 3]
