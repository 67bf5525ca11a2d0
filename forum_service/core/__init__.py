"""Data access layer of the forum service."""

from .exceptions import ApiError, ClientInputError, ConflictError, NotFoundError, UpstreamFailure
from .post_store import PostStore
from .subreddit_store import SubredditStore

__all__ = [
    "ApiError",
    "ClientInputError",
    "ConflictError",
    "NotFoundError",
    "PostStore",
    "SubredditStore",
    "UpstreamFailure",
]
