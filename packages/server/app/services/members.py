"""
Member directory: lookup, signup, profile changes and login.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.auth import hash_password, verify_password
from app.core.errors import (
    EmailAlreadyInUse,
    InvalidCredentials,
    MemberNotExists,
    OperationNotAllowed,
)
from app.models.member import Member
from app.models.team_member import TeamMember
from app.services.paging import fetch_page
from huddle_shared.schemas.common import PageInfo, PageQuery, TeamRole
from huddle_shared.schemas.members import MemberCreateRequest, MemberUpdateRequest

log = structlog.get_logger()


@dataclass(frozen=True)
class ById:
    member_id: int


@dataclass(frozen=True)
class ByEmail:
    email: str


MemberLookup = Union[ById, ByEmail]


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def _find_by_email(email: str, session: AsyncSession) -> Optional[Member]:
    result = await session.execute(
        select(Member).where(Member.email == _normalize_email(email))
    )
    return result.scalar_one_or_none()


async def get_member(lookup: MemberLookup, session: AsyncSession) -> Member:
    """Resolve a member by id or by email; raises MemberNotExists."""
    if isinstance(lookup, ById):
        member = await session.get(Member, lookup.member_id)
    elif isinstance(lookup, ByEmail):
        member = await _find_by_email(lookup.email, session)
    else:
        raise TypeError(f"Unsupported member lookup: {lookup!r}")

    if member is None:
        raise MemberNotExists()
    return member


async def create_member(req: MemberCreateRequest, session: AsyncSession) -> Member:
    email = _normalize_email(req.email)
    if await _find_by_email(email, session) is not None:
        raise EmailAlreadyInUse()

    member = Member(
        email=email,
        name=req.name,
        password_hash=hash_password(req.password),
    )
    session.add(member)
    try:
        await session.flush()
    except IntegrityError:
        raise EmailAlreadyInUse()

    log.info("member.created", member_id=member.id)
    return member


async def read_member(member_id: int, session: AsyncSession) -> Member:
    return await get_member(ById(member_id), session)


async def read_all_members(
    page: PageQuery, session: AsyncSession
) -> tuple[list[Member], PageInfo]:
    rows, info = await fetch_page(session, select(Member), Member.id, page)
    return [member for (member,) in rows], info


def _require_self(member_id: int, caller: Member) -> None:
    if caller.id != member_id:
        raise OperationNotAllowed("Members can only change their own account")


async def update_member(
    member_id: int,
    req: MemberUpdateRequest,
    caller: Member,
    session: AsyncSession,
) -> Member:
    _require_self(member_id, caller)
    member = await get_member(ById(member_id), session)

    if req.name is not None:
        member.name = req.name

    member.updated_at = datetime.now(timezone.utc)
    session.add(member)
    await session.flush()

    log.info("member.updated", member_id=member.id)
    return member


async def delete_member(member_id: int, caller: Member, session: AsyncSession) -> None:
    """Delete the caller's own account. Owners must delete their teams first."""
    _require_self(member_id, caller)
    member = await get_member(ById(member_id), session)

    owned = await session.execute(
        select(TeamMember.id).where(
            TeamMember.member_id == member.id,
            TeamMember.role == TeamRole.OWNER,
        ).limit(1)
    )
    if owned.scalar_one_or_none() is not None:
        raise OperationNotAllowed("Delete the teams you own before deleting your account")

    await session.delete(member)
    await session.flush()
    log.info("member.deleted", member_id=member_id)


async def authenticate(email: str, password: str, session: AsyncSession) -> Member:
    """Check an email/password pair; raises InvalidCredentials on any mismatch."""
    member = await _find_by_email(email, session)

    if member is None or not member.password_hash:
        raise InvalidCredentials()

    if not verify_password(password, member.password_hash):
        log.warning("auth.login_failure", member_id=member.id, reason="bad_password")
        raise InvalidCredentials()

    log.info("auth.login_success", member_id=member.id)
    return member
