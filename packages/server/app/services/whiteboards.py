"""
Whiteboard service: metadata records for shared whiteboards.

Visibility follows the scope: PRIVATE boards are the author's alone, TEAM
boards are readable by every member of their team, PUBLIC boards by anyone
signed in. Only the author may change or delete a board.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import InvalidScope, OperationNotAllowed, WhiteboardNotExists
from app.models.member import Member
from app.models.whiteboard import Whiteboard
from app.services.paging import fetch_page
from app.services.teams import require_membership
from huddle_shared.schemas.common import PageInfo, PageQuery, ScopeType
from huddle_shared.schemas.whiteboards import (
    WhiteboardCreateRequest,
    WhiteboardUpdateRequest,
)

log = structlog.get_logger()


async def _resolve_team(
    scope: ScopeType,
    team_id: Optional[int],
    member: Member,
    session: AsyncSession,
) -> Optional[int]:
    """Team a board with ``scope`` belongs to; the author must be in it."""
    if scope != ScopeType.TEAM:
        if team_id is not None:
            raise InvalidScope("Only team-scoped whiteboards can belong to a team")
        return None
    if team_id is None:
        raise InvalidScope()
    team, _ = await require_membership(team_id, member, session)
    return team.id


async def _get_whiteboard(whiteboard_id: int, session: AsyncSession) -> Whiteboard:
    whiteboard = await session.get(Whiteboard, whiteboard_id)
    if whiteboard is None:
        raise WhiteboardNotExists()
    return whiteboard


def _require_author(whiteboard: Whiteboard, member: Member) -> None:
    if whiteboard.author_id != member.id:
        raise OperationNotAllowed("Only the author can change this whiteboard")


async def create_whiteboard(
    req: WhiteboardCreateRequest, member: Member, session: AsyncSession
) -> Whiteboard:
    team_id = await _resolve_team(req.scope, req.team_id, member, session)
    whiteboard = Whiteboard(
        title=req.title,
        description=req.description,
        whiteboard_url=req.whiteboard_url,
        scope=req.scope,
        author_id=member.id,
        team_id=team_id,
    )
    session.add(whiteboard)
    await session.flush()

    log.info("whiteboard.created", whiteboard_id=whiteboard.id, scope=req.scope.value)
    return whiteboard


async def read_whiteboard(
    whiteboard_id: int, member: Member, session: AsyncSession
) -> Whiteboard:
    whiteboard = await _get_whiteboard(whiteboard_id, session)

    if whiteboard.author_id == member.id or whiteboard.scope == ScopeType.PUBLIC:
        return whiteboard
    if whiteboard.scope == ScopeType.TEAM and whiteboard.team_id is not None:
        await require_membership(whiteboard.team_id, member, session)
        return whiteboard
    raise OperationNotAllowed("This whiteboard is private")


async def read_all_whiteboards(
    member: Member, page: PageQuery, session: AsyncSession
) -> tuple[list[Whiteboard], PageInfo]:
    """The member's own whiteboards, newest first."""
    stmt = select(Whiteboard).where(Whiteboard.author_id == member.id)
    rows, info = await fetch_page(session, stmt, Whiteboard.id, page)
    return [whiteboard for (whiteboard,) in rows], info


async def update_whiteboard(
    whiteboard_id: int,
    req: WhiteboardUpdateRequest,
    member: Member,
    session: AsyncSession,
) -> Whiteboard:
    whiteboard = await _get_whiteboard(whiteboard_id, session)
    _require_author(whiteboard, member)

    if req.title is not None:
        whiteboard.title = req.title
    if req.description is not None:
        whiteboard.description = req.description
    if req.scope is not None or req.team_id is not None:
        scope = req.scope or whiteboard.scope
        team_id = req.team_id
        if team_id is None and scope == ScopeType.TEAM:
            team_id = whiteboard.team_id
        whiteboard.team_id = await _resolve_team(scope, team_id, member, session)
        whiteboard.scope = scope

    whiteboard.updated_at = datetime.now(timezone.utc)
    session.add(whiteboard)
    await session.flush()

    log.info("whiteboard.updated", whiteboard_id=whiteboard.id)
    return whiteboard


async def delete_whiteboard(
    whiteboard_id: int, member: Member, session: AsyncSession
) -> None:
    whiteboard = await _get_whiteboard(whiteboard_id, session)
    _require_author(whiteboard, member)
    await session.delete(whiteboard)
    await session.flush()
    log.info("whiteboard.deleted", whiteboard_id=whiteboard_id)
