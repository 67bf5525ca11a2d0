import os
from unittest.mock import AsyncMock

from dotenv import load_dotenv

# Load test environment variables from .env.test in the project root
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
dotenv_path = os.path.join(project_root, '.env.test')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from forum_service.api.dependencies import get_media_client, get_post_store, get_subreddit_store
from forum_service.api.main import app
from forum_service.core.post_store import PostStore
from forum_service.core.subreddit_store import SubredditStore
from forum_service.integrations.cloudinary import CloudinaryClient


@pytest.fixture
def post_store():
    """Stand-in for the posts data access layer."""
    return AsyncMock(spec=PostStore)


@pytest.fixture
def subreddit_store():
    """Stand-in for the subreddits data access layer."""
    return AsyncMock(spec=SubredditStore)


@pytest.fixture
def media_client():
    """Stand-in for the Cloudinary client."""
    return AsyncMock(spec=CloudinaryClient)


@pytest_asyncio.fixture
async def client(post_store, subreddit_store, media_client):
    """
    HTTP client bound to the app with every store and the media client mocked.

    ASGITransport does not run the lifespan, so no database is touched.
    """
    app.dependency_overrides[get_post_store] = lambda: post_store
    app.dependency_overrides[get_subreddit_store] = lambda: subreddit_store
    app.dependency_overrides[get_media_client] = lambda: media_client

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_session():
    """AsyncSession double; configure `execute.return_value` per test."""
    return AsyncMock()
