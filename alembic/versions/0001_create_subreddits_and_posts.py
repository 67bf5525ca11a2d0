"""create subreddits and posts with cascading foreign key

Revision ID: 0001
Revises:
Create Date: 2026-01-12 10:00:00.000000

Posts reference their subreddit by id; deleting a subreddit deletes its posts.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "subreddits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False, comment="Unique channel name."),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_subreddits"),
        sa.UniqueConstraint("name", name="uq_subreddits_name"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("subreddit_id", sa.Integer(), nullable=False),
        sa.Column("upvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_posts"),
        sa.ForeignKeyConstraint(
            ["subreddit_id"],
            ["subreddits.id"],
            name="fk_posts_subreddit_id_subreddits",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_posts_subreddit_id", "posts", ["subreddit_id"])
    op.create_index("ix_posts_created_at", "posts", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_posts_created_at", table_name="posts")
    op.drop_index("ix_posts_subreddit_id", table_name="posts")
    op.drop_table("posts")
    op.drop_table("subreddits")
