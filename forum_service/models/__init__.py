"""
Models package for the forum service.

This package contains SQLAlchemy ORM models and Pydantic DTOs.
"""

# Ensure all ORM models are registered with the Base metadata when this package is imported.
from . import base
from . import subreddit_orm
from . import post_orm

from .base import Base
from .subreddit_orm import SubredditORM
from .post_orm import PostORM

from .dtos import (
    CreatePostRequest,
    CreateSubredditRequest,
    ErrorResponse,
    PostDTO,
    SubredditDTO,
    UploadResponse,
)

__all__ = [
    # Base
    "Base",
    # ORMs
    "PostORM",
    "SubredditORM",
    # DTOs
    "CreatePostRequest",
    "CreateSubredditRequest",
    "ErrorResponse",
    "PostDTO",
    "SubredditDTO",
    "UploadResponse",
]
