"""Disaster Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - DisasterWrite: address/description/city non-blank after strip
    - DisasterWrite: postal_code numeric (number or numeric string), kept as string
    - DisasterWrite: latitude/longitude must be numeric *strings*
    - DisasterWrite.disaster_types: >= 1 id, duplicates collapsed (first occurrence wins)
    - Every id in [1, MAX_DB_INT]; DisasterCountReport: >= 1 entry, every count in [0, MAX_DB_INT]

Design Decisions:
    - field_validator for side-effect-free transforms (strip, dedupe) - keeps models pure
    - DisasterRead built explicitly from the ORM object: pairings flattened to
      {id, name, count} instead of exposing the association object
"""

import re
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from disaster_api.core.domain_types import MAX_DB_INT

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

RowId = Annotated[int, Field(gt=0, le=MAX_DB_INT)]


def is_numeric(value: str) -> bool:
    """True for strings such as "12345", "-7.25", "1e3"."""
    return bool(_NUMERIC.match(value))


class DisasterWrite(BaseModel):
    """Create/update payload for a disaster location."""
    address: str
    description: str
    city: str
    postal_code: str
    latitude: str
    longitude: str
    disaster_types: list[RowId] = Field(min_length=1)

    @field_validator("address", "description", "city")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v

    @field_validator("postal_code", mode="before")
    @classmethod
    def accept_numeric_postal_code(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("postal_code", "latitude", "longitude")
    @classmethod
    def require_numeric(cls, v: str) -> str:
        v = v.strip()
        if not is_numeric(v):
            raise ValueError("field must be a number")
        return v

    @field_validator("disaster_types")
    @classmethod
    def dedupe_types(cls, v: list[int]) -> list[int]:
        return list(dict.fromkeys(v))

    def scalar_fields(self) -> dict:
        """Column values for the location row (everything except the pairings)."""
        return self.model_dump(exclude={"disaster_types"})


class DisasterCountEntry(BaseModel):
    """One reported tally: `count` incidents of type `id`."""
    id: RowId
    count: int = Field(ge=0, le=MAX_DB_INT)


class DisasterCountReport(BaseModel):
    """Bulk count report for the types already paired with a location."""
    disaster_types: list[DisasterCountEntry] = Field(min_length=1)

    def as_pairs(self) -> list[tuple[int, int]]:
        return [(entry.id, entry.count) for entry in self.disaster_types]


class DisasterTypeRead(BaseModel):
    """Lookup table row."""
    id: int
    name: str


class DisasterTypeCount(BaseModel):
    """A type paired with a location, with its reported count."""
    id: int
    name: str
    count: int = 0


class DisasterRead(BaseModel):
    """Disaster location as returned by every endpoint."""
    id: int
    user_id: int
    latitude: str
    longitude: str
    address: str
    city: str
    postal_code: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    disaster_types: list[DisasterTypeCount] = []

    @classmethod
    def from_model(cls, disaster) -> "DisasterRead":
        return cls(
            id=disaster.id,
            user_id=disaster.user_id,
            latitude=disaster.latitude,
            longitude=disaster.longitude,
            address=disaster.address,
            city=disaster.city,
            postal_code=disaster.postal_code,
            description=disaster.description,
            created_at=disaster.created_at,
            updated_at=disaster.updated_at,
            disaster_types=[
                DisasterTypeCount(
                    id=link.disaster_type_id,
                    name=link.disaster_type.name if link.disaster_type else "",
                    count=link.count or 0,
                )
                for link in disaster.type_links
            ],
        )
