"""DisasterTypeLink ORM - pivot row pairing a location with a disaster type.

Invariants:
    - Composite primary key (disaster_id, disaster_type_id): one pairing per type per location
    - count is a non-negative incident tally, 0 until reported

Design Decisions:
    - ondelete=CASCADE on both FKs: no orphaned pivot rows even for raw SQL deletes
"""

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from disaster_api.db.base import Base


class DisasterTypeLink(Base):
    """Association between a DisasterLocation and a DisasterType, with a count."""
    __tablename__ = "disaster_disaster_type"

    disaster_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("disasters.id", ondelete="CASCADE"), primary_key=True,
    )
    disaster_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("disaster_types.id", ondelete="CASCADE"),
        primary_key=True,
    )
    count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0",
    )

    # Relationships
    disaster: Mapped["DisasterLocation"] = relationship(
        "DisasterLocation", back_populates="type_links",
    )
    disaster_type: Mapped["DisasterType"] = relationship(
        "DisasterType", lazy="selectin",
    )
