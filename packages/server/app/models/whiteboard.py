"""Whiteboard metadata model."""

from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from huddle_shared.schemas.common import ScopeType
from huddle_shared.schemas.whiteboards import WHITEBOARD_URL_MAX_LENGTH

from .base import IdMixin, TimestampMixin, enum_column, fk_column


class Whiteboard(IdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "whiteboards"

    title: str = Field(nullable=False)
    description: Optional[str] = None
    whiteboard_url: Optional[str] = Field(
        default=None, sa_type=sa.String(WHITEBOARD_URL_MAX_LENGTH)
    )
    scope: ScopeType = Field(sa_column=enum_column(ScopeType, "scope_type"))
    author_id: int = Field(sa_column=fk_column("members.id"))
    team_id: Optional[int] = Field(default=None, sa_column=fk_column("teams.id", nullable=True))
