from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from forum_service.core.schema import ensure_schema
from forum_service.models import Base


def engine_with(conn):
    engine = MagicMock()
    engine.begin.return_value.__aenter__.return_value = conn
    return engine


@pytest.mark.asyncio
async def test_creates_missing_tables_only():
    conn = AsyncMock()

    await ensure_schema(engine_with(conn))

    conn.run_sync.assert_awaited_once_with(Base.metadata.create_all, checkfirst=True)


@pytest.mark.asyncio
async def test_propagates_ddl_failure():
    conn = AsyncMock()
    conn.run_sync.side_effect = OperationalError("CREATE TABLE", {}, Exception("permission denied"))

    with pytest.raises(OperationalError):
        await ensure_schema(engine_with(conn))


def test_metadata_declares_both_tables_with_cascade():
    assert set(Base.metadata.tables) == {"subreddits", "posts"}

    posts = Base.metadata.tables["posts"]
    (fk,) = posts.c.subreddit_id.foreign_keys
    assert fk.column.table.name == "subreddits"
    assert fk.ondelete == "CASCADE"
    assert posts.c.upvotes.server_default.arg == "0"

    subreddits = Base.metadata.tables["subreddits"]
    assert subreddits.c.name.unique
    assert not subreddits.c.name.nullable
