"""
Data access for the 'subreddits' table.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert

from forum_service.core.base_store import BaseStore, store_operation
from forum_service.models.dtos import SubredditDTO
from forum_service.models.subreddit_orm import SubredditORM

logger = logging.getLogger(__name__)

subreddits = SubredditORM.__table__


class SubredditStore(BaseStore):
    """Parameterized queries against the subreddits table."""

    @store_operation("subreddits.list")
    async def list(self) -> List[SubredditDTO]:
        """Return every subreddit, newest first."""
        stmt = select(subreddits).order_by(subreddits.c.created_at.desc(), subreddits.c.id.desc())
        result = await self.session.execute(stmt)
        return [SubredditDTO.model_validate(dict(row)) for row in result.mappings().all()]

    @store_operation("subreddits.create")
    async def create(
        self,
        name: str,
        icon: Optional[str] = None,
        banner: Optional[str] = None,
    ) -> Optional[SubredditDTO]:
        """
        Insert a subreddit, skipping the insert when the name is taken.

        There is no existence pre-check: the unique constraint decides, and an
        empty RETURNING set means the name already existed.

        Returns:
            The created row, or None if a subreddit with this name already exists.
        """
        stmt = (
            pg_insert(subreddits)
            .values(name=name, icon=icon, banner=banner)
            .on_conflict_do_nothing(index_elements=[subreddits.c.name])
            .returning(*subreddits.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.commit()
        if row is None:
            logger.info(f"Subreddit '{name}' already exists; insert skipped")
            return None
        return SubredditDTO.model_validate(dict(row))

    @store_operation("subreddits.delete")
    async def delete(self, subreddit_id: int) -> int:
        """
        Delete a subreddit by id. Its posts are removed by ON DELETE CASCADE.

        Returns:
            Number of rows deleted (0 when the id does not exist).
        """
        result = await self.session.execute(delete(subreddits).where(subreddits.c.id == subreddit_id))
        await self.session.commit()
        return result.rowcount
