"""
Subreddit API endpoints.

POST /subreddits accepts either a JSON body (asset URLs optional) or a
multipart form carrying the icon and banner files, which are uploaded to the
media host before the row is inserted.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from forum_service.api.dependencies import get_media_client, get_subreddit_store
from forum_service.api.validation import (
    SUBREDDIT_ASSET_RULES,
    SUBREDDIT_RULES,
    parse_id,
    read_json_body,
    read_upload,
    require_fields,
)
from forum_service.config.settings import settings
from forum_service.core.exceptions import ConflictError, NotFoundError, UpstreamFailure
from forum_service.core.media_uploads import discard_assets, upload_all
from forum_service.core.subreddit_store import SubredditStore
from forum_service.integrations.cloudinary import CloudinaryClient
from forum_service.models.dtos import CreateSubredditRequest, ErrorResponse, SubredditDTO

router = APIRouter(responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
logger = logging.getLogger(__name__)

SUBREDDIT_EXISTS = "Subreddit already exists"


@router.get("", response_model=List[SubredditDTO])
async def list_subreddits(store: SubredditStore = Depends(get_subreddit_store)) -> List[SubredditDTO]:
    """All subreddits, newest first."""
    return await store.list()


@router.post("", response_model=SubredditDTO, status_code=status.HTTP_201_CREATED,
             responses={409: {"model": ErrorResponse}})
async def create_subreddit(
    request: Request,
    store: SubredditStore = Depends(get_subreddit_store),
    media: Optional[CloudinaryClient] = Depends(get_media_client),
) -> SubredditDTO:
    """
    Create a subreddit.

    Returns:
        SubredditDTO: The created subreddit

    Raises:
        ClientInputError: If the name (or, for multipart, either file) is missing
        ConflictError: If a subreddit with the same name already exists
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        return await _create_with_assets(request, store, media)

    payload = await read_json_body(request, CreateSubredditRequest)
    require_fields(payload.model_dump(), SUBREDDIT_RULES)

    subreddit = await store.create(
        name=payload.name.strip(),
        icon=payload.icon or None,
        banner=payload.banner or None,
    )
    if subreddit is None:
        raise ConflictError(SUBREDDIT_EXISTS)

    logger.info(f"Created subreddit {subreddit.id} ({subreddit.name})")
    return subreddit


async def _create_with_assets(
    request: Request,
    store: SubredditStore,
    media: Optional[CloudinaryClient],
) -> SubredditDTO:
    """Upload icon and banner, then insert; uploaded assets are removed if the insert does not happen."""
    form = await request.form()
    name = form.get("name")
    if not isinstance(name, str):
        name = None
    require_fields({"name": name}, SUBREDDIT_RULES)

    icon = await read_upload(form.get("icon"), settings.MEDIA_MAX_UPLOAD_MB)
    banner = await read_upload(form.get("banner"), settings.MEDIA_MAX_UPLOAD_MB)
    require_fields({"icon": icon, "banner": banner}, SUBREDDIT_ASSET_RULES)

    if media is None:
        raise UpstreamFailure("Media host is not configured; cannot upload subreddit assets")

    icon_asset, banner_asset = await upload_all(
        media,
        [
            ("icon", icon, getattr(form.get("icon"), "filename", None)),
            ("banner", banner, getattr(form.get("banner"), "filename", None)),
        ],
        folder=f"{settings.MEDIA_FOLDER}/subreddits",
    )

    try:
        subreddit = await store.create(name=name.strip(), icon=icon_asset.url, banner=banner_asset.url)
    except UpstreamFailure:
        await discard_assets(media, [icon_asset, banner_asset])
        raise

    if subreddit is None:
        await discard_assets(media, [icon_asset, banner_asset])
        raise ConflictError(SUBREDDIT_EXISTS)

    logger.info(f"Created subreddit {subreddit.id} ({subreddit.name}) with uploaded assets")
    return subreddit


@router.delete("/{subreddit_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response,
                responses={404: {"model": ErrorResponse}})
async def delete_subreddit(subreddit_id: str, store: SubredditStore = Depends(get_subreddit_store)) -> Response:
    """Delete a subreddit and, through the foreign key, all of its posts."""
    deleted = await store.delete(parse_id(subreddit_id, "subreddit"))
    if not deleted:
        raise NotFoundError("Subreddit not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
