"""create kpi and assigned_kpi tables

Revision ID: 20261016_0001
Revises:
Create Date: 2026-10-16 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "20261016_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "kpi",
        sa.Column("kpi_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("kpi_name", sa.String(length=255), nullable=False),
        sa.Column(
            "form_data",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            comment="Ordered form element definitions",
        ),
        sa.Column(
            "kpi_created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "kpi_updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="Refreshed on every form update",
        ),
        sa.PrimaryKeyConstraint("kpi_id"),
        sa.UniqueConstraint("kpi_name"),
    )

    op.create_table(
        "assigned_kpi",
        sa.Column("assigned_kpi_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "kpi_name",
            sa.String(length=255),
            nullable=False,
            comment="Name of the referenced kpi row",
        ),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("assigned_kpi_id"),
    )
    op.create_index(
        "ix_assigned_kpi_kpi_name",
        "assigned_kpi",
        ["kpi_name"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_assigned_kpi_kpi_name", table_name="assigned_kpi")
    op.drop_table("assigned_kpi")
    op.drop_table("kpi")
