"""
SQLAlchemy ORM model for the 'posts' table.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, Text, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base


class PostORM(Base):
    """
    SQLAlchemy ORM model representing a post inside a subreddit.

    Attributes:
        id (int): Primary key, generated by the database.
        title (str): Post title.
        body (str): Post body text.
        subreddit_id (int): Owning subreddit. Deleting the subreddit deletes the post.
        upvotes (int): Upvote counter, starts at 0 and is only ever incremented.
        image (str, optional): Hosted image URL.
        source (str): Where the post came from, "user" unless told otherwise.
        created_at (datetime): Creation timestamp (defaults to NOW()).
    """
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    subreddit_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subreddits.id", ondelete="CASCADE"),
        nullable=False,
    )
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Hosted image URL.")
    source: Mapped[str] = mapped_column(Text, nullable=False, server_default="user")
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_posts_subreddit_id", "subreddit_id"),
        Index("ix_posts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<PostORM(id={self.id}, subreddit_id={self.subreddit_id}, upvotes={self.upvotes})>"
