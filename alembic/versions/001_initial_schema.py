"""Initial schema: linkedin_drafts, suggested_topics.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "linkedin_drafts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("flow_id", sa.String(64), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("flow_id"),
    )
    op.create_index("ix_linkedin_drafts_flow_id", "linkedin_drafts", ["flow_id"])
    op.create_table(
        "suggested_topics",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("topic", sa.Text(), nullable=False),
        sa.Column("audience", sa.Text(), nullable=False),
        sa.Column("used", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.PrimaryKeyConstraint("id"),
    )
    # The change feed only delivers tables in the realtime publication
    op.execute("ALTER PUBLICATION supabase_realtime ADD TABLE linkedin_drafts")


def downgrade() -> None:
    op.execute("ALTER PUBLICATION supabase_realtime DROP TABLE linkedin_drafts")
    op.drop_table("suggested_topics")
    op.drop_index("ix_linkedin_drafts_flow_id", table_name="linkedin_drafts")
    op.drop_table("linkedin_drafts")
