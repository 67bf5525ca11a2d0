"""
FastAPI application for the forum service.

This module initializes and configures the FastAPI application that serves
the subreddit, post and upload endpoints.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum_service.api.endpoints import posts, subreddits, uploads
from forum_service.api.errors import register_exception_handlers
from forum_service.config.settings import settings
from forum_service.core.schema import ensure_schema
from forum_service.integrations.cloudinary import CloudinaryClient
from forum_service.utils.db_health import check_db_connection
from forum_service.utils.db_session import dispose_engine, get_async_engine
from forum_service.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    The schema must exist before the first request is served, so a failure
    to create it aborts startup.
    """
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    if settings.DB_CREATE_SCHEMA_ON_STARTUP:
        try:
            await ensure_schema(get_async_engine())
        except Exception as e:
            logger.critical(f"Failed to establish database schema, aborting startup: {e}", exc_info=True)
            raise
    else:
        logger.info("Schema creation on startup disabled; expecting `alembic upgrade head` to have run")

    if settings.media_host_configured:
        app.state.media_client = CloudinaryClient(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            timeout=settings.MEDIA_UPLOAD_TIMEOUT_SECONDS,
        )
    else:
        logger.warning("Cloudinary credentials not configured - uploads will be rejected")
        app.state.media_client = None

    yield

    # Shutdown
    logger.info("Shutting down application")
    if app.state.media_client:
        await app.state.media_client.close()
    await dispose_engine()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="REST backend for subreddits and their posts, with image upload.",
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_tags=[
            {"name": "posts", "description": "Posts and upvotes"},
            {"name": "subreddits", "description": "Topic channels"},
            {"name": "uploads", "description": "Media host uploads"},
            {"name": "health", "description": "Health check and monitoring"},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS if not settings.DEBUG else ["*"],
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)

    app.include_router(posts.router, prefix="/posts", tags=["posts"])
    app.include_router(subreddits.router, prefix="/subreddits", tags=["subreddits"])
    app.include_router(uploads.router, prefix="/upload", tags=["uploads"])

    @app.get("/health", tags=["health"], summary="Health Check")
    async def health_check():
        """Service status, version and database reachability."""
        database_ok = await check_db_connection()
        return {
            "status": "healthy" if database_ok else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "ok" if database_ok else "unreachable",
            "media_host": "enabled" if getattr(app.state, "media_client", None) else "disabled",
        }

    return app


# Create the application instance
app = create_app()
