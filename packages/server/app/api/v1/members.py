"""
Member API endpoints.

POST   /api/v1/members              — Sign up
GET    /api/v1/members              — List members
GET    /api/v1/members/{memberId}   — Member profile
PATCH  /api/v1/members/{memberId}   — Update own profile
DELETE /api/v1/members/{memberId}   — Delete own account
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import page_query
from app.core.auth import get_current_member
from app.core.database import get_session
from app.models.member import Member
from app.services import members as member_service
from huddle_shared.schemas.common import PageQuery
from huddle_shared.schemas.members import (
    MemberCreateRequest,
    MemberCreateResponse,
    MemberListResponse,
    MemberResponse,
    MemberUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=MemberCreateResponse, status_code=201)
async def create_member(
    body: MemberCreateRequest,
    session: AsyncSession = Depends(get_session),
):
    member = await member_service.create_member(body, session)
    return MemberCreateResponse(id=member.id)


@router.get("", response_model=MemberListResponse)
async def list_members(
    page: PageQuery = Depends(page_query),
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    members, info = await member_service.read_all_members(page, session)
    return MemberListResponse(
        data=[MemberResponse.model_validate(m) for m in members],
        page=info,
    )


@router.get("/{memberId}", response_model=MemberResponse)
async def read_member(
    memberId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    found = await member_service.read_member(memberId, session)
    return MemberResponse.model_validate(found)


@router.patch("/{memberId}", response_model=MemberResponse)
async def update_member(
    memberId: int,
    body: MemberUpdateRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    updated = await member_service.update_member(memberId, body, member, session)
    return MemberResponse.model_validate(updated)


@router.delete("/{memberId}", status_code=204)
async def delete_member(
    memberId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    await member_service.delete_member(memberId, member, session)
