"""Shared request dependencies for the v1 routers."""

from fastapi import Query

from huddle_shared.schemas.common import PageQuery


def page_query(
    page_index: int = Query(0, ge=0, alias="pageIndex"),
    top_id: int = Query(0, ge=0, alias="topId"),
    page_size: int = Query(10, ge=1, le=100, alias="pageSize"),
) -> PageQuery:
    return PageQuery(page_index=page_index, top_id=top_id, page_size=page_size)
