"""DisasterType ORM - lookup table of disaster kinds (flood, earthquake, ...).

Invariants:
    - name is unique and non-nullable
    - Never mutated by the API; seeded by migration 002
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from disaster_api.db.base import Base


class DisasterType(Base):
    """A kind of disaster that can be reported at a location."""
    __tablename__ = "disaster_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
