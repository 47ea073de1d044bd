"""rsvp_tables

Revision ID: 0001
Revises:
Create Date: 2026-01-20

Creates the rsvps table and the rsvp_guests table owned by it.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rsvps",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("phone", sa.String(40), nullable=True),
        sa.Column("guest_names", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "rsvp_guests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "rsvp_id",
            sa.String(36),
            sa.ForeignKey("rsvps.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_rsvp_guests_rsvp_id", "rsvp_guests", ["rsvp_id"])


def downgrade() -> None:
    op.drop_index("ix_rsvp_guests_rsvp_id", table_name="rsvp_guests")
    op.drop_table("rsvp_guests")
    op.drop_table("rsvps")
