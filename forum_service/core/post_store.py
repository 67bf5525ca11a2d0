"""
Data access for the 'posts' table.

Every read goes through the subreddits join so that rows carry the owning
subreddit's name. Writes that return a row (create, upvote) run the DML inside
a CTE and join its RETURNING set against subreddits in the same statement.
"""

import logging
from typing import List, Optional

from sqlalchemy import Text, delete, insert, literal, select, update
from sqlalchemy.sql import Select

from forum_service.core.base_store import BaseStore, store_operation
from forum_service.models.dtos import PostDTO
from forum_service.models.post_orm import PostORM
from forum_service.models.subreddit_orm import SubredditORM

logger = logging.getLogger(__name__)

posts = PostORM.__table__
subreddits = SubredditORM.__table__


def _with_subreddit_name(rows) -> Select:
    """Select every column of `rows` plus the owning subreddit's name as `subreddit`."""
    return (
        select(rows, subreddits.c.name.label("subreddit"))
        .join(subreddits, subreddits.c.id == rows.c.subreddit_id)
    )


class PostStore(BaseStore):
    """Parameterized queries against the posts table."""

    @store_operation("posts.list")
    async def list(self, subreddit_name: Optional[str] = None) -> List[PostDTO]:
        """
        Return posts newest first, optionally only those of one subreddit.

        Args:
            subreddit_name: Exact subreddit name to filter on.
        """
        stmt = _with_subreddit_name(posts)
        if subreddit_name is not None:
            stmt = stmt.where(subreddits.c.name == subreddit_name)
        stmt = stmt.order_by(posts.c.created_at.desc(), posts.c.id.desc())

        result = await self.session.execute(stmt)
        return [PostDTO.model_validate(dict(row)) for row in result.mappings().all()]

    @store_operation("posts.create")
    async def create(
        self,
        title: str,
        body: str,
        subreddit_id: int,
        image: Optional[str] = None,
        source: str = "user",
    ) -> Optional[PostDTO]:
        """
        Insert a post into an existing subreddit.

        The row is inserted from a SELECT on subreddits, so nothing is inserted
        when the subreddit does not exist.

        Returns:
            The created row (upvotes = 0), or None if the subreddit does not exist.
        """
        values = (
            select(
                literal(title, Text),
                literal(body, Text),
                subreddits.c.id,
                literal(image, Text),
                literal(source, Text),
            )
            .where(subreddits.c.id == subreddit_id)
        )
        inserted = (
            insert(posts)
            .from_select(["title", "body", "subreddit_id", "image", "source"], values)
            .returning(*posts.c)
            .cte("inserted_post")
        )

        result = await self.session.execute(_with_subreddit_name(inserted))
        row = result.mappings().first()
        await self.session.commit()
        if row is None:
            logger.info(f"Post not created: subreddit {subreddit_id} does not exist")
            return None
        return PostDTO.model_validate(dict(row))

    @store_operation("posts.delete")
    async def delete(self, post_id: int) -> int:
        """
        Delete a post by id.

        Returns:
            Number of rows deleted (0 when the id does not exist).
        """
        result = await self.session.execute(delete(posts).where(posts.c.id == post_id))
        await self.session.commit()
        return result.rowcount

    @store_operation("posts.upvote")
    async def upvote(self, post_id: int) -> Optional[PostDTO]:
        """
        Atomically increment a post's upvote counter by one.

        Returns:
            The updated row, or None if the post does not exist.
        """
        upvoted = (
            update(posts)
            .where(posts.c.id == post_id)
            .values(upvotes=posts.c.upvotes + 1)
            .returning(*posts.c)
            .cte("upvoted_post")
        )

        result = await self.session.execute(_with_subreddit_name(upvoted))
        row = result.mappings().first()
        await self.session.commit()
        if row is None:
            return None
        return PostDTO.model_validate(dict(row))
