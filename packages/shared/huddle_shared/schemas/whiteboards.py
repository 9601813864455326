"""Whiteboard metadata schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .common import PageInfo, ScopeType

WHITEBOARD_URL_MAX_LENGTH = 2048


class WhiteboardCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    whiteboard_url: Optional[str] = Field(default=None, max_length=WHITEBOARD_URL_MAX_LENGTH)
    scope: ScopeType = ScopeType.PRIVATE
    team_id: Optional[int] = Field(default=None, ge=1)


class WhiteboardUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    scope: Optional[ScopeType] = None
    team_id: Optional[int] = Field(default=None, ge=1)


class WhiteboardCreateResponse(BaseModel):
    id: int


class WhiteboardReadResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    whiteboard_url: Optional[str] = None
    scope: ScopeType
    author_id: int
    team_id: Optional[int] = None


class WhiteboardListResponse(BaseModel):
    data: list[WhiteboardReadResponse]
    page: PageInfo
