"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, DisasterId, DisasterTypeId wrap ints - never pass bare ids through domain logic
    - Capability values are the wire names used in authorization messages and logs
    - Ids and counts accepted at the boundary fit MAX_DB_INT (the int4 column range)
    - Caller is immutable and always passed explicitly (no ambient "current user")

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
DisasterId = NewType("DisasterId", int)
DisasterTypeId = NewType("DisasterTypeId", int)

# Upper bound of the INTEGER id/count columns (int4 on PostgreSQL)
MAX_DB_INT = 2**31 - 1


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Caller:
    """The authenticated principal issuing a request."""
    user_id: UserId


# ─── Enums ───────────────────────────────────────────────────────

class Capability(str, Enum):
    """Actions a caller may be granted on a single resource."""
    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"
    CHANGE_COUNT = "change-count"
