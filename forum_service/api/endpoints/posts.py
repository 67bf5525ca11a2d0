"""
Post API endpoints.

Listing, creation, deletion and upvoting of posts.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from forum_service.api.dependencies import get_post_store
from forum_service.api.validation import POST_RULES, parse_id, require_fields
from forum_service.core.exceptions import NotFoundError
from forum_service.core.post_store import PostStore
from forum_service.models.dtos import CreatePostRequest, ErrorResponse, PostDTO

router = APIRouter(responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
NOT_FOUND = {404: {"model": ErrorResponse}}
logger = logging.getLogger(__name__)


@router.get("", response_model=List[PostDTO])
async def list_posts(store: PostStore = Depends(get_post_store)) -> List[PostDTO]:
    """All posts with their subreddit name, newest first."""
    return await store.list()


@router.get("/r/{subreddit}", response_model=List[PostDTO])
async def list_subreddit_posts(subreddit: str, store: PostStore = Depends(get_post_store)) -> List[PostDTO]:
    """Posts of one subreddit, looked up by name, newest first."""
    return await store.list(subreddit_name=subreddit)


@router.post("", response_model=PostDTO, status_code=status.HTTP_201_CREATED, responses=NOT_FOUND)
async def create_post(
    request: CreatePostRequest,
    store: PostStore = Depends(get_post_store),
) -> PostDTO:
    """
    Create a post in an existing subreddit.

    Args:
        request: Post fields; title, body and subredditId are required
        store: Post data access

    Returns:
        PostDTO: The created post with its generated id and upvotes = 0

    Raises:
        ClientInputError: If a required field is missing
        NotFoundError: If the subreddit does not exist
    """
    require_fields(request.model_dump(), POST_RULES)

    post = await store.create(
        title=request.title,
        body=request.body,
        subreddit_id=request.subreddit_id,
        image=request.image or None,
        source=request.source or "user",
    )
    if post is None:
        raise NotFoundError("Subreddit not found")

    logger.info(f"Created post {post.id} in subreddit {post.subreddit_id}")
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
                responses=NOT_FOUND)
async def delete_post(post_id: str, store: PostStore = Depends(get_post_store)) -> Response:
    """Delete a post by id; 404 if nothing was deleted."""
    deleted = await store.delete(parse_id(post_id, "post"))
    if not deleted:
        raise NotFoundError("Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{post_id}/upvote", response_model=PostDTO, responses=NOT_FOUND)
async def upvote_post(post_id: str, store: PostStore = Depends(get_post_store)) -> PostDTO:
    """Add exactly one upvote to a post and return the updated post."""
    post = await store.upvote(parse_id(post_id, "post"))
    if post is None:
        raise NotFoundError("Post not found")
    return post
