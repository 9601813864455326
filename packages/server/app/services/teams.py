"""
Team workflow service: team lifecycle, membership and open meeting rooms.

Every function runs inside the caller's session; the request dependency
commits once the endpoint returns and rolls back if anything raises, so a
failed check never leaves half-written rows behind. The acting member is
always passed in explicitly.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.config import get_settings
from app.core.errors import (
    CodeAlreadyInUse,
    MemberAlreadyJoined,
    MemberNotInTeam,
    RoomNameAlready,
    RoomNameNotExists,
    TeamNotExists,
)
from app.core.mail import MailService
from app.core.media import MediaStorage
from app.core.permissions import TeamOperation, check_permission
from app.core.urls import UrlBuilder
from app.models.meeting_room import TeamMeetingRoom
from app.models.member import Member
from app.models.team import Team
from app.models.team_member import TeamMember
from app.services.members import ByEmail, ById, get_member
from app.services.paging import fetch_page
from huddle_shared.schemas.common import FileType, PageInfo, PageQuery, TeamRole
from huddle_shared.schemas.teams import TeamCreateRequest, TeamUpdateRequest

log = structlog.get_logger()
settings = get_settings()

TEAM_IMAGE_PREFIX = "team"
INVITATION_PATH = "/api/v1/teams/{team_id}/members/invitation"
INVITATION_PARAM = "memberId"


def team_image_key(team_id: int) -> str:
    return f"{TEAM_IMAGE_PREFIX}_{team_id}.{FileType.PNG.value}"


# ---------------------------------------------------------------------------
# Store lookups
# ---------------------------------------------------------------------------

async def _get_team(team_id: int, session: AsyncSession) -> Team:
    team = await session.get(Team, team_id)
    if team is None:
        raise TeamNotExists()
    return team


async def _find_team_by_code(code: str, session: AsyncSession) -> Optional[int]:
    result = await session.execute(select(Team.id).where(Team.code == code))
    return result.scalar_one_or_none()


async def _find_membership(
    team_id: int, member_id: int, session: AsyncSession
) -> Optional[TeamMember]:
    result = await session.execute(
        select(TeamMember).where(
            TeamMember.team_id == team_id,
            TeamMember.member_id == member_id,
        )
    )
    return result.scalar_one_or_none()


async def _find_room(
    team_id: int, room_name: str, session: AsyncSession
) -> Optional[TeamMeetingRoom]:
    result = await session.execute(
        select(TeamMeetingRoom).where(
            TeamMeetingRoom.team_id == team_id,
            TeamMeetingRoom.name == room_name,
        )
    )
    return result.scalar_one_or_none()


async def _room_names(team_id: int, session: AsyncSession) -> list[str]:
    result = await session.execute(
        select(TeamMeetingRoom.name)
        .where(TeamMeetingRoom.team_id == team_id)
        .order_by(TeamMeetingRoom.id)
    )
    return list(result.scalars().all())


async def _join(
    team: Team, member: Member, role: TeamRole, session: AsyncSession
) -> TeamMember:
    """Insert a membership row; the (team, member) unique constraint backs the
    read-then-write check done by callers."""
    if await _find_membership(team.id, member.id, session) is not None:
        raise MemberAlreadyJoined()

    membership = TeamMember(team_id=team.id, member_id=member.id, role=role)
    session.add(membership)
    try:
        await session.flush()
    except IntegrityError:
        raise MemberAlreadyJoined()
    return membership


def _touch(team: Team) -> None:
    team.updated_at = datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Authorization primitives
# ---------------------------------------------------------------------------

async def require_membership(
    team_id: int, member: Member, session: AsyncSession
) -> tuple[Team, TeamMember]:
    """Team must exist and ``member`` must belong to it."""
    team = await _get_team(team_id, session)
    membership = await _find_membership(team.id, member.id, session)
    if membership is None:
        raise MemberNotInTeam()
    return team, membership


async def authorize(
    team_id: int,
    member: Member,
    operation: TeamOperation,
    session: AsyncSession,
) -> tuple[Team, TeamMember]:
    """Membership check followed by the permission table lookup."""
    team, membership = await require_membership(team_id, member, session)
    check_permission(operation, membership.role)
    return team, membership


# ---------------------------------------------------------------------------
# Team lifecycle
# ---------------------------------------------------------------------------

async def create_team(
    req: TeamCreateRequest, member: Member, session: AsyncSession
) -> Team:
    """Create a team and make ``member`` its owner."""
    if await _find_team_by_code(req.code, session) is not None:
        raise CodeAlreadyInUse()

    team = Team(code=req.code, name=req.name)
    session.add(team)
    try:
        await session.flush()
    except IntegrityError:
        raise CodeAlreadyInUse()

    await _join(team, member, TeamRole.OWNER, session)

    log.info("team.created", team_id=team.id, code=team.code, owner_id=member.id)
    return team


async def read_team(team_id: int, member: Member, session: AsyncSession) -> dict:
    team, _ = await authorize(team_id, member, TeamOperation.READ, session)
    return {
        "id": team.id,
        "code": team.code,
        "name": team.name,
        "open_meetings": await _room_names(team.id, session),
        "profile_image_url": team.profile_image_url,
    }


async def read_all_teams(
    member: Member, page: PageQuery, session: AsyncSession
) -> tuple[list[dict], PageInfo]:
    """The member's teams, newest membership first."""
    stmt = (
        select(TeamMember, Team)
        .join(Team, Team.id == TeamMember.team_id)
        .where(TeamMember.member_id == member.id)
    )
    rows, info = await fetch_page(session, stmt, TeamMember.id, page)
    items = [
        {
            "membership_id": membership.id,
            "team_id": team.id,
            "code": team.code,
            "name": team.name,
            "role": membership.role,
            "profile_image_url": team.profile_image_url,
        }
        for membership, team in rows
    ]
    return items, info


async def update_team(
    team_id: int, req: TeamUpdateRequest, member: Member, session: AsyncSession
) -> Team:
    team, _ = await authorize(team_id, member, TeamOperation.UPDATE, session)
    team.name = req.name
    _touch(team)
    session.add(team)
    await session.flush()

    log.info("team.updated", team_id=team.id)
    return team


async def delete_team(team_id: int, member: Member, session: AsyncSession) -> None:
    """Delete the team; memberships and meeting rooms cascade in the database."""
    team, _ = await authorize(team_id, member, TeamOperation.DELETE, session)
    await session.delete(team)
    await session.flush()
    log.info("team.deleted", team_id=team_id, by=member.id)


async def create_team_image(
    team_id: int,
    member: Member,
    session: AsyncSession,
    media: MediaStorage,
) -> dict:
    """Hand out an upload URL for the team picture and record where it will live."""
    team, _ = await authorize(team_id, member, TeamOperation.CREATE_IMAGE, session)

    key = team_image_key(team.id)
    bucket = settings.image_bucket_name
    pre_signed_url = media.generate_presigned_url(key, bucket, FileType.PNG)
    image_url = media.get_object_url(key, bucket)

    team.profile_image_key = key
    team.profile_image_url = image_url
    _touch(team)
    session.add(team)
    await session.flush()

    log.info("team.image_assigned", team_id=team.id, key=key)
    return {"id": team.id, "pre_signed_url": pre_signed_url, "image_url": image_url}


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

async def list_team_members(
    team_id: int, member: Member, session: AsyncSession
) -> list[dict]:
    team, _ = await authorize(team_id, member, TeamOperation.LIST_MEMBERS, session)
    result = await session.execute(
        select(TeamMember, Member)
        .join(Member, Member.id == TeamMember.member_id)
        .where(TeamMember.team_id == team.id)
        .order_by(TeamMember.id)
    )
    return [
        {
            "member_id": m.id,
            "name": m.name,
            "email": m.email,
            "role": tm.role,
            "joined_at": tm.joined_at,
        }
        for tm, m in result.all()
    ]


async def send_team_invitation(
    team_id: int,
    target_email: str,
    member: Member,
    session: AsyncSession,
    mailer: MailService,
    urls: UrlBuilder,
) -> str:
    """Mail a join link to ``target_email``. Nothing is stored until the link is
    followed. Returns the link."""
    team, _ = await authorize(team_id, member, TeamOperation.SEND_INVITATION, session)
    target = await get_member(ByEmail(target_email), session)

    link = urls.build_url(
        INVITATION_PATH.format(team_id=team.id), INVITATION_PARAM, target.id
    )
    await mailer.send_team_member_invitation_link(target.email, link, team.name)

    log.info("team.invitation_sent", team_id=team.id, invitee_id=target.id, by=member.id)
    return link


async def verify_invitation_and_join(
    team_id: int, member_id: int, session: AsyncSession
) -> TeamMember:
    """Second half of the invitation handshake. Possession of the link is the
    only authorization."""
    team = await _get_team(team_id, session)
    invitee = await get_member(ById(member_id), session)
    membership = await _join(team, invitee, TeamRole.USER, session)

    log.info("team_member.joined", team_id=team.id, member_id=invitee.id, via="invitation")
    return membership


async def add_member(
    team_id: int, target_member_id: int, member: Member, session: AsyncSession
) -> TeamMember:
    team, _ = await authorize(team_id, member, TeamOperation.ADD_MEMBER, session)
    target = await get_member(ById(target_member_id), session)
    membership = await _join(team, target, TeamRole.USER, session)

    log.info("team_member.joined", team_id=team.id, member_id=target.id, by=member.id)
    return membership


async def remove_member(
    team_id: int, target_member_id: int, member: Member, session: AsyncSession
) -> None:
    """Leave a team, or (owners only) remove someone else from it."""
    target = await get_member(ById(target_member_id), session)

    if target.id == member.id:
        team = await _get_team(team_id, session)
    else:
        team, _ = await authorize(
            team_id, member, TeamOperation.REMOVE_OTHER_MEMBER, session
        )

    membership = await _find_membership(team.id, target.id, session)
    if membership is None:
        raise MemberNotInTeam()

    await session.delete(membership)
    await session.flush()
    log.info("team_member.removed", team_id=team.id, member_id=target.id, by=member.id)


# ---------------------------------------------------------------------------
# Open meeting rooms
# ---------------------------------------------------------------------------

async def add_room_name(team_id: int, room_name: str, session: AsyncSession) -> Team:
    # TODO: no role gate here, unlike every other mutation; waiting on a
    # product decision before requiring membership.
    team = await _get_team(team_id, session)
    if await _find_room(team.id, room_name, session) is not None:
        raise RoomNameAlready()

    session.add(TeamMeetingRoom(team_id=team.id, name=room_name))
    try:
        await session.flush()
    except IntegrityError:
        raise RoomNameAlready()

    log.info("team.room_opened", team_id=team.id, room_name=room_name)
    return team


async def remove_room_name(team_id: int, room_name: str, session: AsyncSession) -> None:
    team = await _get_team(team_id, session)
    room = await _find_room(team.id, room_name, session)
    if room is None:
        raise RoomNameNotExists()

    await session.delete(room)
    await session.flush()
    log.info("team.room_closed", team_id=team.id, room_name=room_name)
