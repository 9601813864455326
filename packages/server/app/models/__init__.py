# SQLModel definitions — imported here to ensure metadata is populated for Alembic.
from .base import IdMixin, TimestampMixin  # noqa: F401
from .member import Member  # noqa: F401
from .team import Team  # noqa: F401
from .team_member import TeamMember  # noqa: F401
from .meeting_room import TeamMeetingRoom  # noqa: F401
from .whiteboard import Whiteboard  # noqa: F401
