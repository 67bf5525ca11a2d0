"""Idempotent schema bootstrap run before the API accepts requests."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from forum_service.models import Base

logger = logging.getLogger(__name__)


async def ensure_schema(engine: AsyncEngine) -> None:
    """
    Create the subreddits and posts tables if they do not exist yet.

    Existing tables are left untouched; column changes to existing tables are
    the job of the Alembic revisions under ``alembic/versions``.

    Raises:
        SQLAlchemyError: If the database cannot be reached or the DDL fails.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info(f"Schema ensured for tables: {', '.join(sorted(Base.metadata.tables))}")
