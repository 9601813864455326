"""
Team API endpoints.

POST   /api/v1/teams                                — Create a team (caller becomes owner)
GET    /api/v1/teams                                — List the caller's teams
GET    /api/v1/teams/{teamId}                       — Team details (members only)
PATCH  /api/v1/teams/{teamId}                       — Rename (owner)
DELETE /api/v1/teams/{teamId}                       — Delete (owner)
POST   /api/v1/teams/{teamId}/image                 — Pre-signed profile image upload (owner)
GET    /api/v1/teams/{teamId}/members               — List members (members)
POST   /api/v1/teams/{teamId}/members               — Add a member (members)
POST   /api/v1/teams/{teamId}/members/invitation    — Email an invitation link (owner)
GET    /api/v1/teams/{teamId}/members/invitation    — Follow an invitation link
DELETE /api/v1/teams/{teamId}/members/{memberId}    — Leave, or remove a member (owner)
POST   /api/v1/teams/{teamId}/meetings              — Open a meeting room name
DELETE /api/v1/teams/{teamId}/meetings/{roomName}   — Close a meeting room name
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.deps import page_query
from app.core.auth import get_current_member
from app.core.database import get_session
from app.core.mail import MailService, get_mail_service
from app.core.media import MediaStorage, get_media_storage
from app.core.urls import UrlBuilder, get_url_builder
from app.models.member import Member
from app.services import teams as team_service
from huddle_shared.schemas.common import PageQuery
from huddle_shared.schemas.teams import (
    TeamCreateRequest,
    TeamCreateResponse,
    TeamImageCreateResponse,
    TeamInvitationRequest,
    TeamListItem,
    TeamListResponse,
    TeamMeetingRequest,
    TeamMemberAddRequest,
    TeamMemberAddResponse,
    TeamMemberItem,
    TeamMemberListResponse,
    TeamReadResponse,
    TeamUpdateRequest,
    TeamUpdateResponse,
)

router = APIRouter()


@router.post("", response_model=TeamCreateResponse, status_code=201)
async def create_team(
    body: TeamCreateRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    """Create a team. The caller becomes its owner."""
    team = await team_service.create_team(body, member, session)
    return TeamCreateResponse(id=team.id)


@router.get("", response_model=TeamListResponse)
async def list_teams(
    page: PageQuery = Depends(page_query),
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    """Teams the caller belongs to, most recently joined first."""
    items, info = await team_service.read_all_teams(member, page, session)
    return TeamListResponse(data=[TeamListItem(**item) for item in items], page=info)


@router.get("/{teamId}", response_model=TeamReadResponse)
async def read_team(
    teamId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    info = await team_service.read_team(teamId, member, session)
    return TeamReadResponse(**info)


@router.patch("/{teamId}", response_model=TeamUpdateResponse)
async def update_team(
    teamId: int,
    body: TeamUpdateRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    """Rename the team (owner only)."""
    team = await team_service.update_team(teamId, body, member, session)
    return TeamUpdateResponse(id=team.id)


@router.delete("/{teamId}", status_code=204)
async def delete_team(
    teamId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    """Delete the team together with its memberships (owner only)."""
    await team_service.delete_team(teamId, member, session)


@router.post("/{teamId}/image", response_model=TeamImageCreateResponse)
async def create_team_image(
    teamId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
    media: MediaStorage = Depends(get_media_storage),
):
    """Issue a pre-signed PUT URL for the team's profile image (owner only)."""
    info = await team_service.create_team_image(teamId, member, session, media)
    return TeamImageCreateResponse(**info)


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------

@router.post("/{teamId}/members/invitation", status_code=202)
async def send_invitation(
    teamId: int,
    body: TeamInvitationRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
    mailer: MailService = Depends(get_mail_service),
    urls: UrlBuilder = Depends(get_url_builder),
):
    """Email a join link to an existing member (owner only)."""
    await team_service.send_team_invitation(
        teamId, body.member_email, member, session, mailer, urls
    )
    return {"message": "Invitation sent"}


@router.get("/{teamId}/members/invitation", response_model=TeamMemberAddResponse)
async def accept_invitation(
    teamId: int,
    member_id: int = Query(..., ge=1, alias="memberId"),
    session: AsyncSession = Depends(get_session),
):
    """Target of the emailed link; joins the invited member as a user."""
    membership = await team_service.verify_invitation_and_join(teamId, member_id, session)
    return TeamMemberAddResponse(team_id=membership.team_id, member_id=membership.member_id)


@router.get("/{teamId}/members", response_model=TeamMemberListResponse)
async def list_members(
    teamId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    items = await team_service.list_team_members(teamId, member, session)
    return TeamMemberListResponse(data=[TeamMemberItem(**item) for item in items])


@router.post("/{teamId}/members", response_model=TeamMemberAddResponse, status_code=201)
async def add_member(
    teamId: int,
    body: TeamMemberAddRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    """Add a member directly. Any member of the team may do this."""
    membership = await team_service.add_member(teamId, body.member_id, member, session)
    return TeamMemberAddResponse(team_id=membership.team_id, member_id=membership.member_id)


@router.delete("/{teamId}/members/{memberId}", status_code=204)
async def remove_member(
    teamId: int,
    memberId: int,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    """Leave the team (self) or remove another member (owner only)."""
    await team_service.remove_member(teamId, memberId, member, session)


# ---------------------------------------------------------------------------
# Open meeting rooms
# ---------------------------------------------------------------------------

@router.post("/{teamId}/meetings", response_model=TeamUpdateResponse)
async def add_room_name(
    teamId: int,
    body: TeamMeetingRequest,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    team = await team_service.add_room_name(teamId, body.room_name, session)
    return TeamUpdateResponse(id=team.id)


@router.delete("/{teamId}/meetings/{roomName:path}", status_code=204)
async def remove_room_name(
    teamId: int,
    roomName: str,
    member: Member = Depends(get_current_member),
    session: AsyncSession = Depends(get_session),
):
    await team_service.remove_room_name(teamId, roomName, session)
