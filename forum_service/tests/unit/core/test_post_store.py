"""
Unit tests for PostStore.

The session is mocked; the statements handed to it are compiled with the
PostgreSQL dialect and inspected.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from forum_service.core.exceptions import UpstreamFailure
from forum_service.core.post_store import PostStore

POST_ROW = {
    "id": 5,
    "title": "Hello",
    "body": "World",
    "subreddit_id": 2,
    "upvotes": 0,
    "image": None,
    "source": "user",
    "created_at": datetime(2026, 2, 1, tzinfo=timezone.utc),
    "subreddit": "tech",
}


def executed_statement(session):
    stmt = session.execute.await_args.args[0]
    return stmt.compile(dialect=postgresql.dialect())


def result_with_rows(rows):
    result = MagicMock()
    result.mappings.return_value.all.return_value = rows
    result.mappings.return_value.first.return_value = rows[0] if rows else None
    return result


class TestPostStoreList:

    @pytest.mark.asyncio
    async def test_lists_newest_first_with_subreddit_name(self, mock_session):
        mock_session.execute.return_value = result_with_rows([POST_ROW])

        posts = await PostStore(mock_session).list()

        assert len(posts) == 1
        assert posts[0].subreddit == "tech"
        sql = str(executed_statement(mock_session))
        assert "JOIN subreddits ON subreddits.id = posts.subreddit_id" in sql
        assert "ORDER BY posts.created_at DESC, posts.id DESC" in sql
        assert "WHERE" not in sql

    @pytest.mark.asyncio
    async def test_filter_binds_subreddit_name(self, mock_session):
        mock_session.execute.return_value = result_with_rows([])

        posts = await PostStore(mock_session).list(subreddit_name="tech'; DROP TABLE posts; --")

        assert posts == []
        compiled = executed_statement(mock_session)
        assert "subreddits.name = %(name_1)s" in str(compiled)
        assert compiled.params["name_1"] == "tech'; DROP TABLE posts; --"


class TestPostStoreCreate:

    @pytest.mark.asyncio
    async def test_inserts_from_existing_subreddit(self, mock_session):
        mock_session.execute.return_value = result_with_rows([POST_ROW])

        post = await PostStore(mock_session).create(title="Hello", body="World", subreddit_id=2)

        assert post.id == 5
        assert post.upvotes == 0
        assert post.subreddit == "tech"
        compiled = executed_statement(mock_session)
        sql = str(compiled)
        assert "INSERT INTO posts (title, body, subreddit_id, image, source)" in sql
        assert "FROM subreddits" in sql
        assert "RETURNING" in sql
        assert "Hello" in compiled.params.values()
        assert 2 in compiled.params.values()
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_subreddit_returns_none(self, mock_session):
        mock_session.execute.return_value = result_with_rows([])

        post = await PostStore(mock_session).create(title="Hello", body="World", subreddit_id=999)

        assert post is None


class TestPostStoreDelete:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rowcount", [0, 1])
    async def test_returns_rowcount(self, mock_session, rowcount):
        result = MagicMock()
        result.rowcount = rowcount
        mock_session.execute.return_value = result

        deleted = await PostStore(mock_session).delete(5)

        assert deleted == rowcount
        assert str(executed_statement(mock_session)).startswith("DELETE FROM posts WHERE posts.id =")
        mock_session.commit.assert_awaited_once()


class TestPostStoreUpvote:

    @pytest.mark.asyncio
    async def test_increments_in_the_database(self, mock_session):
        mock_session.execute.return_value = result_with_rows([{**POST_ROW, "upvotes": 3}])

        post = await PostStore(mock_session).upvote(5)

        assert post.upvotes == 3
        sql = str(executed_statement(mock_session))
        assert "UPDATE posts SET upvotes=" in sql
        assert "posts.upvotes +" in sql
        assert "RETURNING" in sql
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_post_returns_none(self, mock_session):
        mock_session.execute.return_value = result_with_rows([])

        assert await PostStore(mock_session).upvote(404) is None


class TestPostStoreFailures:

    @pytest.mark.asyncio
    async def test_driver_error_becomes_upstream_failure(self, mock_session):
        error = OperationalError("SELECT", {}, ConnectionRefusedError("connection refused"))
        mock_session.execute.side_effect = error

        with pytest.raises(UpstreamFailure) as exc_info:
            await PostStore(mock_session).list()

        assert exc_info.value.status_code == 500
        assert exc_info.value.__cause__ is error
        assert "posts.list" in exc_info.value.message
