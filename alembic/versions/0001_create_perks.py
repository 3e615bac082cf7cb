"""create perks table

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "perks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(length=20), nullable=False),
        sa.Column("discount_percent", sa.Float(), nullable=False),
        sa.Column("merchant", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "discount_percent >= 0 AND discount_percent <= 100",
            name=op.f("ck_perks_discount_percent_range"),
        ),
        sa.CheckConstraint(
            "category IN ('food', 'tech', 'travel', 'fitness', 'other')",
            name=op.f("ck_perks_category_allowed"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_perks")),
        sa.UniqueConstraint("title", name=op.f("uq_perks_title")),
    )
    op.create_index(op.f("ix_perks_created_at"), "perks", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_perks_created_at"), table_name="perks")
    op.drop_table("perks")
