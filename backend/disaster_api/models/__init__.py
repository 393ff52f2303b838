"""ORM Models - SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - DisasterLocation is the aggregate root; its type pairings live and die with it

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from disaster_api.models.disaster_type import DisasterType  # noqa: F401
from disaster_api.models.disaster import DisasterLocation  # noqa: F401
from disaster_api.models.disaster_type_link import DisasterTypeLink  # noqa: F401
