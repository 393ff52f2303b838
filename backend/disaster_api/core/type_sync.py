"""Type Sync Planning - set-replacement and count-merge plans for type pairings.

Invariants:
    - plan_type_sync: after applying the plan the pairing set equals `desired` exactly
    - plan_type_sync: pairings in both sets are kept untouched (their count survives)
    - merge_reported_counts: only already-associated types may receive a count
    - merge_reported_counts: never adds or removes a pairing

Design Decisions:
    - Reports are keyed by type id, not by position: the submitted order never
      has to match the stored association order
    - Errors collected per entry and raised once, keyed like the request body
      (disaster_types.<index>.id) so clients can point at the offending entry
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from disaster_api.core.domain_types import DisasterTypeId
from disaster_api.core.errors import RequestValidationFailed


@dataclass(frozen=True)
class TypeSyncPlan:
    """Pairing changes needed to turn the current type set into the desired one."""
    detach: tuple[DisasterTypeId, ...]
    attach: tuple[DisasterTypeId, ...]
    keep: tuple[DisasterTypeId, ...]

    @property
    def is_noop(self) -> bool:
        return not self.detach and not self.attach


def plan_type_sync(
    current: Iterable[DisasterTypeId], desired: Iterable[DisasterTypeId],
) -> TypeSyncPlan:
    """Plan a full replacement of `current` by `desired`, order of `desired` preserved."""
    current_list = list(dict.fromkeys(current))
    desired_list = list(dict.fromkeys(desired))
    current_set = set(current_list)
    desired_set = set(desired_list)
    return TypeSyncPlan(
        detach=tuple(t for t in current_list if t not in desired_set),
        attach=tuple(t for t in desired_list if t not in current_set),
        keep=tuple(t for t in current_list if t in desired_set),
    )


def missing_type_ids(
    requested: Sequence[int], existing: Iterable[int], field: str,
    suffix: str = "",
) -> dict[str, list[str]]:
    """Field errors for every requested id absent from `existing`."""
    known = set(existing)
    errors: dict[str, list[str]] = {}
    for index, type_id in enumerate(requested):
        if type_id not in known:
            key = f"{field}.{index}{suffix}"
            errors[key] = [f"The selected {key} is invalid."]
    return errors


def merge_reported_counts(
    associated: Iterable[DisasterTypeId],
    entries: Sequence[tuple[DisasterTypeId, int]],
) -> dict[DisasterTypeId, int]:
    """Validate a count report against the associated types; return {type_id: count}."""
    associated_set = set(associated)
    counts: dict[DisasterTypeId, int] = {}
    errors: dict[str, list[str]] = {}
    for index, (type_id, count) in enumerate(entries):
        key = f"disaster_types.{index}.id"
        if type_id in counts:
            errors[key] = [f"The {key} field has a duplicate value."]
        elif type_id not in associated_set:
            errors[key] = [
                f"The {key} field must reference a disaster type "
                "already associated with this location."
            ]
        else:
            counts[type_id] = count
    if errors:
        raise RequestValidationFailed(errors)
    return counts
