from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from forum_service.core.post_store import PostStore
from forum_service.core.subreddit_store import SubredditStore
from forum_service.integrations.cloudinary import CloudinaryClient
from forum_service.utils.db_session import get_db_session


async def get_post_store(session: AsyncSession = Depends(get_db_session)) -> PostStore:
    """Post store bound to the request's session."""
    return PostStore(session)


async def get_subreddit_store(session: AsyncSession = Depends(get_db_session)) -> SubredditStore:
    """Subreddit store bound to the request's session."""
    return SubredditStore(session)


async def get_media_client(request: Request) -> Optional[CloudinaryClient]:
    """Media host client from app state, None when Cloudinary is not configured."""
    return getattr(request.app.state, "media_client", None)
