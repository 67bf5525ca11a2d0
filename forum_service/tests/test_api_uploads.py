"""
Tests for POST /upload.
"""

import pytest

from forum_service.api.dependencies import get_media_client
from forum_service.api.main import app
from forum_service.config.settings import settings
from forum_service.integrations.cloudinary import MediaUploadError, UploadedAsset


class TestUploadEndpoint:

    @pytest.mark.asyncio
    async def test_upload_returns_hosted_url(self, client, media_client):
        media_client.upload.return_value = UploadedAsset(
            url="https://res.cloudinary.com/demo/image/upload/v1/reddit-clone/posts/cat.png",
            public_id="reddit-clone/posts/cat",
        )

        response = await client.post("/upload", files={"file": ("cat.png", b"\x89PNG-data", "image/png")})

        assert response.status_code == 200
        assert response.json() == {
            "url": "https://res.cloudinary.com/demo/image/upload/v1/reddit-clone/posts/cat.png",
        }
        media_client.upload.assert_awaited_once_with(
            b"\x89PNG-data", folder=f"{settings.MEDIA_FOLDER}/posts", filename="cat.png",
        )

    @pytest.mark.asyncio
    async def test_missing_file_is_400(self, client, media_client):
        response = await client.post("/upload")

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}
        media_client.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_file_is_400(self, client, media_client):
        response = await client.post("/upload", files={"file": ("empty.png", b"", "image/png")})

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}
        media_client.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_oversized_file_is_400(self, client, media_client, monkeypatch):
        monkeypatch.setattr(settings, "MEDIA_MAX_UPLOAD_MB", 0)

        response = await client.post("/upload", files={"file": ("big.png", b"x" * 16, "image/png")})

        assert response.status_code == 400
        assert response.json() == {"error": "File size exceeds 0MB limit"}
        media_client.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_media_host_failure_is_500(self, client, media_client):
        media_client.upload.side_effect = MediaUploadError("Cloudinary upload returned HTTP 401: Invalid Signature")

        response = await client.post("/upload", files={"file": ("cat.png", b"data", "image/png")})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "Signature" not in response.text

    @pytest.mark.asyncio
    async def test_media_host_not_configured_is_500(self, client):
        app.dependency_overrides[get_media_client] = lambda: None

        response = await client.post("/upload", files={"file": ("cat.png", b"data", "image/png")})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
