"""add media URL columns and post source

Revision ID: 0002
Revises: 0001
Create Date: 2026-01-19 10:00:00.000000

Adds the hosted asset URLs written by the upload flow (subreddit icon and
banner, post image) and the post `source` tag.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    # Databases bootstrapped by the service's startup create_all already have these.
    subreddit_cols = {c["name"] for c in inspector.get_columns("subreddits")}
    if "icon" not in subreddit_cols:
        op.add_column("subreddits", sa.Column("icon", sa.Text(), nullable=True, comment="Hosted icon URL."))
    if "banner" not in subreddit_cols:
        op.add_column("subreddits", sa.Column("banner", sa.Text(), nullable=True, comment="Hosted banner URL."))

    post_cols = {c["name"] for c in inspector.get_columns("posts")}
    if "image" not in post_cols:
        op.add_column("posts", sa.Column("image", sa.Text(), nullable=True, comment="Hosted image URL."))
    if "source" not in post_cols:
        op.add_column("posts", sa.Column("source", sa.Text(), server_default="user", nullable=False))


def downgrade() -> None:
    op.drop_column("posts", "source")
    op.drop_column("posts", "image")
    op.drop_column("subreddits", "banner")
    op.drop_column("subreddits", "icon")
