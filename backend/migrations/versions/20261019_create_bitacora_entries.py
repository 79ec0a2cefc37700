"""Create bitacora_entries table.

Revision ID: 20261019_bitacora_entries
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_bitacora_entries"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bitacora_entries",
        sa.Column("entry_id", sa.String(length=36), primary_key=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("entry_date", sa.String(length=40), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("owner", sa.String(length=128), nullable=False),
        sa.Column("category", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "completed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
    )
    op.create_index(
        "ix_bitacora_entries_position", "bitacora_entries", ["position"]
    )


def downgrade() -> None:
    op.drop_index("ix_bitacora_entries_position", table_name="bitacora_entries")
    op.drop_table("bitacora_entries")
