"""
Whiteboard API endpoints.

POST   /api/v1/whiteboards                  — Create
GET    /api/v1/whiteboards                  — List own whiteboards
GET    /api/v1/whiteboards/{whiteboardId}   — Read (scope permitting)
PATCH  /api/v1/whiteboards/{whiteboardId}   — Update (author)
DELETE /api/v1/whiteboards/{whiteboardId}   — Delete (author)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import page_query
from app.core.auth import get_current_member
from app.core.database import get_session
from app.models.member import Member
from app.models.whiteboard import Whiteboard
from app.services import whiteboards as whiteboard_service
from huddle_shared.schemas.common import PageQuery
from huddle_shared.schemas.whiteboards import (
    WhiteboardCreateRequest,
    WhiteboardCreateResponse,
    WhiteboardListResponse,
    WhiteboardReadResponse,
    WhiteboardUpdateRequest,
)

router = APIRouter()


def _to_response(whiteboard: Whiteboard) -> WhiteboardReadResponse:
    return WhiteboardReadResponse(
        id=whiteboard.id,
        title=whiteboard.title,
        description=whiteboard.description,
        whiteboard_url=whiteboard.whiteboard_url,
        scope=whiteboard.scope,
        author_id=whiteboard.author_id,
        team_id=whiteboard.team_id,
    )


@router.post("", response_model=WhiteboardCreateResponse, status_code=201)
async def create_whiteboard(
    body: WhiteboardCreateRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    whiteboard = await whiteboard_service.create_whiteboard(body, member, session)
    return WhiteboardCreateResponse(id=whiteboard.id)


@router.get("", response_model=WhiteboardListResponse)
async def list_whiteboards(
    page: PageQuery = Depends(page_query),
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    items, info = await whiteboard_service.read_all_whiteboards(member, page, session)
    return WhiteboardListResponse(data=[_to_response(w) for w in items], page=info)


@router.get("/{whiteboardId}", response_model=WhiteboardReadResponse)
async def read_whiteboard(
    whiteboardId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    whiteboard = await whiteboard_service.read_whiteboard(whiteboardId, member, session)
    return _to_response(whiteboard)


@router.patch("/{whiteboardId}", response_model=WhiteboardReadResponse)
async def update_whiteboard(
    whiteboardId: int,
    body: WhiteboardUpdateRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    whiteboard = await whiteboard_service.update_whiteboard(
        whiteboardId, body, member, session
    )
    return _to_response(whiteboard)


@router.delete("/{whiteboardId}", status_code=204)
async def delete_whiteboard(
    whiteboardId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    await whiteboard_service.delete_whiteboard(whiteboardId, member, session)
