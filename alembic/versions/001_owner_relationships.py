"""Create owner_relationships table.

Revision ID: 001_owner_relationships
Revises:
Create Date: 2026-10-19

One row per owner. The relationship list is a JSONB array written
together with the version counter.
"""

from typing import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_owner_relationships"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create owner_relationships table."""
    op.create_table(
        "owner_relationships",
        sa.Column("owner_id", sa.Text, primary_key=True, nullable=False),
        sa.Column("version", sa.BigInteger, nullable=False, server_default="0"),
        sa.Column(
            "relationships",
            postgresql.JSONB,
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint("version >= 0", name="ck_owner_relationships_version"),
    )


def downgrade() -> None:
    """Drop owner_relationships table."""
    op.drop_table("owner_relationships")
