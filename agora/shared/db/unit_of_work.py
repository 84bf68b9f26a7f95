"""
Unit of Work

Multi-row writes (Like + Notification, Follow + Notification,
Comment + Notification, Post + its notifications) must land together or not
at all. atomic() wraps such a block in one transaction on the request's
session.

Usage:
======
    from agora.shared.db.unit_of_work import atomic

    async with atomic(self.session):
        self.session.add(like)
        self.session.add(notification)
    # committed here; on any exception both are rolled back

    like_count = await self.count_likes(post_id)  # read after commit

Integrity Errors:
=================
A unique-constraint violation inside the block (duplicate email, a second
concurrent like of the same post) is rolled back and re-raised as
ConflictError so callers see a 409 rather than a driver exception.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agora.shared.core.exceptions import ConflictError
from agora.shared.core.logging import db_logger


@asynccontextmanager
async def atomic(
    session: AsyncSession,
    conflict_message: str = "Resource already exists",
    resource: Optional[str] = None,
) -> AsyncIterator[AsyncSession]:
    """
    Run the enclosed writes as a single committed transaction.

    Args:
        session: The request session
        conflict_message: Message for the ConflictError raised on IntegrityError
        resource: Resource name recorded in the conflict details

    Yields:
        The same session, for convenience

    Raises:
        ConflictError: A uniqueness constraint rejected the writes
    """
    try:
        yield session
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        db_logger.warning(
            "Integrity error, transaction rolled back",
            resource=resource,
            error=str(exc.orig),
        )
        raise ConflictError(conflict_message, resource=resource) from exc
    except Exception:
        await session.rollback()
        raise
