"""
Pagination Utility Module

Provides standardized pagination helpers for list endpoints.
"""
from typing import Optional
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.core.config import settings


class PaginationParams(BaseModel):
    """Standard pagination parameters"""
    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def normalize_pagination(page: int, page_size: int) -> PaginationParams:
    """Clamp to page >= 1 and 1 <= page_size <= MAX_PAGE_SIZE"""
    page = max(1, page)
    page_size = max(1, min(settings.MAX_PAGE_SIZE, page_size))
    return PaginationParams(page=page, page_size=page_size)


def page_metadata(total: int, page: int, page_size: int) -> dict:
    """
    Page math shared by list endpoints.

    total_pages is ceil(total / page_size), so an empty result has 0 pages.
    """
    total_pages = (total + page_size - 1) // page_size

    return {
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_previous": page > 1
    }


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int = 1,
    page_size: int = 10,
    count_query: Optional[Select] = None
) -> dict:
    """
    Apply pagination to a SQLAlchemy query.

    Args:
        db: Database session
        query: Base SQLAlchemy query (already filtered and ordered)
        page: Page number (1-indexed)
        page_size: Items per page, capped at MAX_PAGE_SIZE
        count_query: Optional custom count query

    Returns:
        Dictionary with items, total, page, page_size, total_pages, has_next, has_previous
    """
    params = normalize_pagination(page, page_size)

    if count_query is None:
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
    count_result = await db.execute(count_query)
    total = count_result.scalar() or 0

    result = await db.execute(query.offset(params.offset).limit(params.limit))
    items = result.scalars().all()

    return {"items": items, **page_metadata(total, params.page, params.page_size)}
