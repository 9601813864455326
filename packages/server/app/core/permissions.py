"""
Team permission table.

Every role-gated team operation is listed here with the roles allowed to
perform it. Joining through an invitation link and editing open meeting rooms
only need the team to exist and are not listed.
"""

from __future__ import annotations

from enum import Enum

from huddle_shared.schemas.common import TeamRole

from app.core.errors import OperationNotAllowed


class TeamOperation(str, Enum):
    READ = "read"
    LIST_MEMBERS = "list_members"
    ADD_MEMBER = "add_member"
    SEND_INVITATION = "send_invitation"
    REMOVE_OTHER_MEMBER = "remove_other_member"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_IMAGE = "create_image"


_ANY_MEMBER = frozenset({TeamRole.OWNER, TeamRole.USER})
_OWNER_ONLY = frozenset({TeamRole.OWNER})

TEAM_PERMISSIONS: dict[TeamOperation, frozenset[TeamRole]] = {
    TeamOperation.READ: _ANY_MEMBER,
    TeamOperation.LIST_MEMBERS: _ANY_MEMBER,
    TeamOperation.ADD_MEMBER: _ANY_MEMBER,
    TeamOperation.SEND_INVITATION: _OWNER_ONLY,
    TeamOperation.REMOVE_OTHER_MEMBER: _OWNER_ONLY,
    TeamOperation.UPDATE: _OWNER_ONLY,
    TeamOperation.DELETE: _OWNER_ONLY,
    TeamOperation.CREATE_IMAGE: _OWNER_ONLY,
}


def is_allowed(operation: TeamOperation, role: TeamRole | str) -> bool:
    return TeamRole(role) in TEAM_PERMISSIONS[operation]


def check_permission(operation: TeamOperation, role: TeamRole | str) -> None:
    """Raise OperationNotAllowed unless ``role`` may perform ``operation``."""
    if not is_allowed(operation, role):
        raise OperationNotAllowed(
            f"Role '{TeamRole(role).value}' cannot {operation.value.replace('_', ' ')}"
        )
