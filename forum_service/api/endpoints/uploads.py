"""
File upload endpoint.

Forwards a single file to the media host and returns the hosted URL, which
clients then send as a post's `image`.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from forum_service.api.dependencies import get_media_client
from forum_service.api.validation import read_upload
from forum_service.config.settings import settings
from forum_service.core.exceptions import ClientInputError, UpstreamFailure
from forum_service.integrations.cloudinary import CloudinaryClient
from forum_service.models.dtos import ErrorResponse, UploadResponse

router = APIRouter(responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
logger = logging.getLogger(__name__)


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    media: Optional[CloudinaryClient] = Depends(get_media_client),
) -> UploadResponse:
    """
    Upload one file to the media host.

    Raises:
        ClientInputError: If no file (or an empty file) was sent
        UpstreamFailure: If the media host is unavailable or rejects the upload
    """
    content = await read_upload(file, settings.MEDIA_MAX_UPLOAD_MB)
    if not content:
        raise ClientInputError("No file uploaded")

    if media is None:
        raise UpstreamFailure("Media host is not configured; cannot upload files")

    asset = await media.upload(content, folder=f"{settings.MEDIA_FOLDER}/posts", filename=file.filename)
    logger.info(f"Uploaded {file.filename!r} as {asset.public_id}")
    return UploadResponse(url=asset.url)
