"""
Cursor Pagination

Feeds, profile timelines, comment threads and notification lists are all
paged with an opaque cursor: the id of the last item of the previous page.

How a Page Is Built:
====================
    1. Repository resolves the cursor id to its row (unknown id → 400)
    2. Query is ordered by (created_at DESC, id DESC) and restricted to rows
       strictly after the cursor row                       ← apply_cursor()
    3. limit + 1 rows are fetched
    4. paginate() drops the extra row and derives the next cursor

    rows fetched (limit=3):  [p9, p8, p7, p6]
    page returned:           items=[p9, p8, p7], next_cursor="p7", has_next_page=True

Cursors are exclusive: passing "p7" returns p6 onwards, never p7 again.

Usage:
======
    from agora.shared.utils.pagination import apply_cursor, paginate

    query = select(Post)
    query = apply_cursor(query, Post, cursor_row)
    rows = (await session.execute(query.limit(limit + 1))).scalars().all()
    return paginate(rows, limit)
"""

from typing import Any, Generic, Optional, Sequence, TypeVar

from pydantic import Field
from sqlalchemy import Select, and_, or_

from agora.shared.schemas.common import BaseSchema


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


T = TypeVar("T")


class PaginatedResult(BaseSchema, Generic[T]):
    """
    One page of results.

    Serialized as {"items": [...], "nextCursor": "...", "hasNextPage": true}.
    """

    items: list[T]
    next_cursor: Optional[str] = None
    has_next_page: bool = False


class PaginationParams(BaseSchema):
    """
    Cursor and page size.

    Example:
        PaginationParams(cursor="7d1f0c2e-...", limit=20)
    """

    cursor: Optional[str] = None
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


def paginate(items: Sequence[T], limit: int) -> PaginatedResult[T]:
    """
    Turn an over-fetched row list into a page.

    Args:
        items: Up to limit + 1 rows, already ordered
        limit: Page size the caller asked for

    Returns:
        PaginatedResult with at most ``limit`` items. When more rows exist,
        next_cursor is the id of the last kept item.

    Example:
        paginate([a, b, c], 2)  → items=[a, b], next_cursor=b.id, has_next_page=True
        paginate([a, b], 2)     → items=[a, b], next_cursor=None, has_next_page=False
        paginate([], 10)        → items=[],     next_cursor=None, has_next_page=False
    """
    if len(items) > limit:
        kept = list(items[:limit])
        return PaginatedResult[Any](
            items=kept,
            next_cursor=kept[-1].id if kept else None,
            has_next_page=True,
        )
    return PaginatedResult[Any](items=list(items), next_cursor=None, has_next_page=False)


def apply_cursor(
    query: Select,
    model: Any,
    cursor_row: Optional[Any] = None,
    *,
    ascending: bool = False,
) -> Select:
    """
    Order ``query`` by (created_at, id) and skip everything up to the cursor.

    Args:
        query: Select to extend
        model: Mapped class whose created_at / id columns define the order
        cursor_row: Row of ``model`` the previous page ended on, or None
        ascending: Oldest first (comment threads) instead of newest first

    Returns:
        The query with ORDER BY and, when a cursor is given, the keyset WHERE

    SQL Generated (descending):
        WHERE created_at < :c_created
           OR (created_at = :c_created AND id < :c_id)
        ORDER BY created_at DESC, id DESC
    """
    created_at = model.created_at
    row_id = model.id

    if cursor_row is not None:
        if ascending:
            after = or_(
                created_at > cursor_row.created_at,
                and_(created_at == cursor_row.created_at, row_id > cursor_row.id),
            )
        else:
            after = or_(
                created_at < cursor_row.created_at,
                and_(created_at == cursor_row.created_at, row_id < cursor_row.id),
            )
        query = query.where(after)

    if ascending:
        return query.order_by(created_at.asc(), row_id.asc())
    return query.order_by(created_at.desc(), row_id.desc())
