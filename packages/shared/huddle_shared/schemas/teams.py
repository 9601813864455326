"""
Team-related Pydantic schemas.

Covers: team CRUD request/response, membership changes, invitations,
open meeting rooms and profile images.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .common import PageInfo, TeamRole


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class TeamCreateRequest(BaseModel):
    code: str = Field(
        ...,
        min_length=4,
        max_length=20,
        pattern=r"^[A-Za-z0-9]+$",
        description="Join code shared with prospective members",
    )
    name: str = Field(..., min_length=1, max_length=100)


class TeamUpdateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class TeamMemberAddRequest(BaseModel):
    member_id: int = Field(..., ge=1)


class TeamInvitationRequest(BaseModel):
    member_email: EmailStr


class TeamMeetingRequest(BaseModel):
    room_name: str = Field(..., min_length=1, max_length=100)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class TeamCreateResponse(BaseModel):
    id: int


class TeamUpdateResponse(BaseModel):
    id: int


class TeamReadResponse(BaseModel):
    id: int
    code: str
    name: str
    open_meetings: list[str] = []
    profile_image_url: Optional[str] = None


class TeamListItem(BaseModel):
    """One of the requesting member's teams, keyed by membership id."""
    membership_id: int
    team_id: int
    code: str
    name: str
    role: TeamRole
    profile_image_url: Optional[str] = None


class TeamListResponse(BaseModel):
    data: list[TeamListItem]
    page: PageInfo


class TeamMemberAddResponse(BaseModel):
    team_id: int
    member_id: int


class TeamMemberItem(BaseModel):
    member_id: int
    name: str
    email: str
    role: TeamRole
    joined_at: datetime


class TeamMemberListResponse(BaseModel):
    data: list[TeamMemberItem]


class TeamImageCreateResponse(BaseModel):
    id: int
    pre_signed_url: str
    image_url: str
