"""
Pydantic Data Transfer Objects (DTOs) for the forum service.

These models are used for API request/response validation and for handing rows
from the data access layer to the routers.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# Largest value a PostgreSQL INTEGER primary key can hold.
MAX_ID = 2**31 - 1

# A row id as sent in a JSON body: a real integer (not a bool or numeric string) in INTEGER range.
RowId = Annotated[StrictInt, Field(ge=1, le=MAX_ID)]


class SubredditDTO(BaseModel):
    """
    DTO for a subreddit row.

    Mirrors SubredditORM and is used for API responses.
    """
    id: int
    name: str
    icon: Optional[str] = None
    banner: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PostDTO(BaseModel):
    """
    DTO for a post row.

    Mirrors PostORM; `subreddit` carries the owning subreddit's name when the
    row was read through the subreddits join.
    """
    id: int
    title: str
    body: str
    subreddit_id: int
    subreddit: Optional[str] = None
    upvotes: int = 0
    image: Optional[str] = None
    source: str = "user"
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CreatePostRequest(BaseModel):
    """
    Request body for POST /posts.

    Every field is optional at the schema level; presence is checked by
    `forum_service.api.validation.require_fields` so that a missing field
    yields a 400 with a readable message rather than a schema error.
    """
    title: Optional[str] = None
    body: Optional[str] = None
    subreddit_id: Optional[RowId] = Field(None, alias="subredditId")
    image: Optional[str] = None
    source: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class CreateSubredditRequest(BaseModel):
    """Request body for POST /subreddits when sent as JSON."""
    name: Optional[str] = None
    icon: Optional[str] = None
    banner: Optional[str] = None


class UploadResponse(BaseModel):
    """Response body for POST /upload."""
    url: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    error: str
