"""Seed the disaster_types lookup table.

Revision ID: 002_seed_disaster_types
Revises: 001_initial
Create Date: 2026-10-19

The API never writes to disaster_types, so the rows clients can pair with a
location are provisioned here.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_seed_disaster_types"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DISASTER_TYPES = [
    "Flood", "Earthquake", "Fire", "Landslide",
    "Tsunami", "Storm", "Drought", "Volcanic eruption",
]

_disaster_types = sa.table(
    "disaster_types",
    sa.column("id", sa.Integer),
    sa.column("name", sa.String),
)


def upgrade() -> None:
    op.bulk_insert(_disaster_types, [{"name": name} for name in DISASTER_TYPES])


def downgrade() -> None:
    op.execute(
        _disaster_types.delete().where(_disaster_types.c.name.in_(DISASTER_TYPES)),
    )
