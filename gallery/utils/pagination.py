"""
Pagination utilities
"""

from typing import TypeVar, Generic, List
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

T = TypeVar('T')

class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a listing"""
    items: List[T]
    total: int
    page: int
    size: int
    pages: int

async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    size: int = 20
) -> dict:
    """
    Run one page of a select

    Loader options on the query still apply to the page; ordering is
    dropped for the count.

    Returns:
        Dict shaped like PaginatedResponse with ORM rows as items
    """
    total = await db.scalar(
        select(func.count()).select_from(query.order_by(None).subquery())
    ) or 0

    rows = await db.execute(query.offset((page - 1) * size).limit(size))

    return {
        "items": rows.scalars().unique().all(),
        "total": total,
        "page": page,
        "size": size,
        "pages": -(-total // size),
    }
