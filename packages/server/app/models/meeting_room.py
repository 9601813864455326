"""Open meeting room names, one row per (team, name)."""

from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import fk_column


class TeamMeetingRoom(SQLModel, table=True):
    __tablename__ = "team_meeting_rooms"
    __table_args__ = (
        sa.UniqueConstraint("team_id", "name", name="uq_team_meeting_rooms_team_name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(sa_column=fk_column("teams.id"))
    name: str = Field(nullable=False)
