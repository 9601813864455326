"""Member directory schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .common import PageInfo


class MemberCreateRequest(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=8, max_length=128)


class MemberUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class MemberCreateResponse(BaseModel):
    id: int


class MemberResponse(BaseModel):
    id: int
    email: str
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MemberListResponse(BaseModel):
    data: list[MemberResponse]
    page: PageInfo


class AuthResponse(BaseModel):
    member_id: int
    email: str
    access_token: str
    token_type: str = "bearer"
