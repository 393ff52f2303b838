"""DisasterLocation ORM - a user-owned place where disasters occur.

Invariants:
    - user_id is the owner; ownership is enforced by authorization, not by a FK
    - latitude, longitude, postal_code stored exactly as submitted (numeric strings)
    - type_links ordered by disaster_type_id: this is the "store order" of pairings

Design Decisions:
    - Association object (DisasterTypeLink) over a plain secondary table:
      the pairing carries its own `count` column
    - cascade delete-orphan on type_links: removing a link from the collection
      deletes the pivot row; FK also cascades at DB level
    - lazy="selectin": relationships loaded eagerly, no implicit IO in async code
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from disaster_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DisasterLocation(Base):
    """A disaster location reported and owned by a single user."""
    __tablename__ = "disasters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    latitude: Mapped[str] = mapped_column(String(32), nullable=False)
    longitude: Mapped[str] = mapped_column(String(32), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    # Relationships
    type_links: Mapped[list["DisasterTypeLink"]] = relationship(
        "DisasterTypeLink", back_populates="disaster",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="DisasterTypeLink.disaster_type_id",
    )

    @property
    def type_ids(self) -> list[int]:
        return [link.disaster_type_id for link in self.type_links]
