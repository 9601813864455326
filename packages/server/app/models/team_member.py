"""Team membership (join table between teams and members)."""

from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from huddle_shared.schemas.common import TeamRole

from .base import enum_column, fk_column


class TeamMember(SQLModel, table=True):
    __tablename__ = "team_members"
    __table_args__ = (
        sa.UniqueConstraint("team_id", "member_id", name="uq_team_members_team_member"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(sa_column=fk_column("teams.id"))
    member_id: int = Field(sa_column=fk_column("members.id"))
    role: TeamRole = Field(sa_column=enum_column(TeamRole, "team_role"))
    joined_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        sa_column_kwargs={"server_default": sa.func.now()},
        sa_type=sa.DateTime(timezone=True),
    )
