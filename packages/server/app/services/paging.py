"""Newest-first pagination shared by every listing endpoint."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from huddle_shared.schemas.common import PageInfo, PageQuery


async def fetch_page(
    session: AsyncSession,
    stmt: Any,
    id_column: Any,
    page: PageQuery,
) -> tuple[list, PageInfo]:
    """Run ``stmt`` ordered by ``id_column`` descending and cut one page out of it.

    A non-zero ``top_id`` keeps only rows strictly older than it. Returns the
    result rows and the page description.
    """
    if page.top_id:
        stmt = stmt.where(id_column < page.top_id)

    total = (
        await session.execute(select(func.count()).select_from(stmt.subquery()))
    ).scalar_one()

    result = await session.execute(
        stmt.order_by(id_column.desc())
        .offset(page.page_index * page.page_size)
        .limit(page.page_size)
    )
    rows = result.all()

    info = PageInfo(
        page_index=page.page_index,
        page_size=page.page_size,
        top_id=page.top_id,
        is_last=(page.page_index + 1) * page.page_size >= total,
    )
    return rows, info
