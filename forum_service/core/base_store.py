"""Shared plumbing for the data access layer."""

import logging
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from forum_service.core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")
AsyncFunc = Callable[..., Awaitable[T]]


def store_operation(name: str) -> Callable[[AsyncFunc], AsyncFunc]:
    """
    Decorator that turns driver/SQLAlchemy failures into UpstreamFailure.

    The original exception is logged with its traceback and chained onto the
    raised UpstreamFailure; nothing is retried.

    Args:
        name: Operation label used in the log line (e.g. "posts.create").
    """
    def decorator(func: AsyncFunc) -> AsyncFunc:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(f"Store operation {name} failed: {e}", exc_info=True)
                raise UpstreamFailure(f"{name} failed: {e}") from e
        return wrapper
    return decorator


class BaseStore:
    """A data access object bound to one request-scoped AsyncSession."""

    def __init__(self, session: AsyncSession):
        self.session = session
