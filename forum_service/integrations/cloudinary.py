"""
Cloudinary integration client for hosting uploaded images.

This module provides an async client that forwards raw file bytes to the
Cloudinary upload API and returns the publicly resolvable URL.
"""

import hashlib
import logging
import time
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from forum_service.core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"


class MediaUploadError(UpstreamFailure):
    """The media host rejected or failed an upload or destroy call."""


class UploadedAsset(BaseModel):
    """An asset stored on the media host."""
    url: str
    public_id: str


def sign_params(params: Dict[str, Any], api_secret: str) -> str:
    """
    Compute a Cloudinary API signature.

    The parameters are sorted by name, joined as ``key=value`` pairs with
    ``&``, suffixed with the API secret and hashed with SHA-1.
    """
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient:
    """
    Async client for the Cloudinary image upload API.

    One upload call per request, no retries. Failures are raised as
    MediaUploadError.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 30.0,
        api_base: str = CLOUDINARY_API_BASE,
    ):
        """
        Initialize Cloudinary client.

        Args:
            cloud_name: Cloudinary cloud name (account identifier)
            api_key: Cloudinary API key
            api_secret: Cloudinary API secret used for request signing
            timeout: Request timeout in seconds
            api_base: Base URL of the Cloudinary API
        """
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.base_url = f"{api_base}/{cloud_name}/image"

        self.client = httpx.AsyncClient(timeout=httpx.Timeout(timeout))

        logger.info(f"Cloudinary client initialized for cloud: {cloud_name}")

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()
        logger.info("Cloudinary client closed")

    def _signed(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = {**params, "timestamp": int(time.time())}
        params["signature"] = sign_params(params, self.api_secret)
        params["api_key"] = self.api_key
        return params

    async def _post(self, action: str, data: Dict[str, Any], files: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}/{action}"
        try:
            response = await self.client.post(url, data=data, files=files)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise MediaUploadError(
                f"Cloudinary {action} returned HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise MediaUploadError(f"Cloudinary {action} request failed: {e}") from e
        except ValueError as e:
            raise MediaUploadError(f"Cloudinary {action} returned a non-JSON body") from e

    async def upload(self, data: bytes, folder: str, filename: Optional[str] = None) -> UploadedAsset:
        """
        Upload raw file bytes into a folder.

        Args:
            data: File content
            folder: Destination folder label on the media host
            filename: Original filename, forwarded for content sniffing

        Returns:
            UploadedAsset: Hosted HTTPS URL and public id of the asset

        Raises:
            MediaUploadError: If the request fails or the response has no URL
        """
        payload = await self._post(
            "upload",
            data=self._signed({"folder": folder}),
            files={"file": (filename or "upload", data)},
        )

        url = payload.get("secure_url") or payload.get("url")
        public_id = payload.get("public_id")
        if not url or not public_id:
            raise MediaUploadError(f"Cloudinary upload response missing url/public_id: {payload}")

        logger.info(f"Uploaded {len(data)} bytes to Cloudinary as {public_id}")
        return UploadedAsset(url=url, public_id=public_id)

    async def destroy(self, public_id: str) -> bool:
        """
        Delete a previously uploaded asset.

        Returns:
            bool: True if Cloudinary reports the asset as deleted
        """
        payload = await self._post("destroy", data=self._signed({"public_id": public_id}))
        deleted = payload.get("result") == "ok"
        if deleted:
            logger.info(f"Destroyed Cloudinary asset {public_id}")
        else:
            logger.warning(f"Cloudinary destroy for {public_id} returned {payload.get('result')!r}")
        return deleted
