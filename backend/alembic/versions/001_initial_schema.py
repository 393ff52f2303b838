"""Initial schema - disaster_types, disasters, disaster_disaster_type.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "disaster_types",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        "disasters",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("latitude", sa.String(32), nullable=False),
        sa.Column("longitude", sa.String(32), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("postal_code", sa.String(32), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_disasters_user_id", "disasters", ["user_id"])

    op.create_table(
        "disaster_disaster_type",
        sa.Column(
            "disaster_id", sa.Integer,
            sa.ForeignKey("disasters.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "disaster_type_id", sa.Integer,
            sa.ForeignKey("disaster_types.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("count", sa.Integer, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("disaster_disaster_type")
    op.drop_index("ix_disasters_user_id", table_name="disasters")
    op.drop_table("disasters")
    op.drop_table("disaster_types")
