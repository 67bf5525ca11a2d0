"""
Upload helpers that keep the media host free of orphaned assets.

Uploading several files for one request is not atomic: if a later upload, or
the database insert that follows, fails, the assets already uploaded for that
request are destroyed again.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from forum_service.integrations.cloudinary import CloudinaryClient, MediaUploadError, UploadedAsset

logger = logging.getLogger(__name__)

# (label, content, original filename)
PendingFile = Tuple[str, bytes, Optional[str]]


async def discard_assets(media: CloudinaryClient, assets: Iterable[UploadedAsset]) -> None:
    """Best-effort removal of uploaded assets. Failures are logged, never raised."""
    for asset in assets:
        try:
            await media.destroy(asset.public_id)
        except MediaUploadError as e:
            logger.warning(f"Could not remove orphaned asset {asset.public_id}: {e.message}")


async def upload_all(media: CloudinaryClient, files: Sequence[PendingFile], folder: str) -> List[UploadedAsset]:
    """
    Upload every file in order.

    Returns:
        The uploaded assets, in the same order as `files`.

    Raises:
        MediaUploadError: If any upload fails. Assets uploaded before the
            failure have been destroyed by then.
    """
    uploaded: List[UploadedAsset] = []
    for label, content, filename in files:
        try:
            uploaded.append(await media.upload(content, folder=folder, filename=filename))
        except MediaUploadError:
            logger.error(f"Upload of {label} failed after {len(uploaded)} successful upload(s); rolling back")
            await discard_assets(media, uploaded)
            raise
    return uploaded
