"""
SQLAlchemy ORM model for the 'subreddits' table.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, Text, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base


class SubredditORM(Base):
    """
    SQLAlchemy ORM model representing a topic channel.

    Attributes:
        id (int): Primary key, generated by the database.
        name (str): Unique channel name (e.g. "gaming").
        icon (str, optional): Hosted URL of the channel icon.
        banner (str, optional): Hosted URL of the channel banner.
        created_at (datetime): Creation timestamp (defaults to NOW()).
    """
    __tablename__ = "subreddits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True, comment="Unique channel name.")
    icon: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Hosted icon URL.")
    banner: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Hosted banner URL.")
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<SubredditORM(id={self.id}, name='{self.name}')>"
