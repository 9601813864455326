"""
Team permission table tests (no DB needed).
"""

import pytest

from app.core.errors import OperationNotAllowed
from app.core.permissions import TEAM_PERMISSIONS, TeamOperation, check_permission, is_allowed
from huddle_shared.schemas.common import TeamRole

OWNER_ONLY = {
    TeamOperation.UPDATE,
    TeamOperation.DELETE,
    TeamOperation.CREATE_IMAGE,
    TeamOperation.SEND_INVITATION,
    TeamOperation.REMOVE_OTHER_MEMBER,
}


def test_every_operation_listed():
    assert set(TEAM_PERMISSIONS) == set(TeamOperation)


def test_owner_may_do_everything():
    for operation in TeamOperation:
        assert is_allowed(operation, TeamRole.OWNER)


@pytest.mark.parametrize("operation", sorted(OWNER_ONLY, key=lambda op: op.value))
def test_user_denied_owner_operations(operation):
    assert not is_allowed(operation, TeamRole.USER)
    with pytest.raises(OperationNotAllowed):
        check_permission(operation, TeamRole.USER)


@pytest.mark.parametrize(
    "operation",
    [TeamOperation.READ, TeamOperation.LIST_MEMBERS, TeamOperation.ADD_MEMBER],
)
def test_user_allowed_member_operations(operation):
    check_permission(operation, TeamRole.USER)


def test_accepts_stored_string_role():
    assert is_allowed(TeamOperation.DELETE, "owner")
    assert not is_allowed(TeamOperation.DELETE, "user")


def test_unknown_role_rejected():
    with pytest.raises(ValueError):
        is_allowed(TeamOperation.READ, "admin")


def test_error_message_names_role_and_operation():
    with pytest.raises(OperationNotAllowed) as exc_info:
        check_permission(TeamOperation.REMOVE_OTHER_MEMBER, TeamRole.USER)
    assert exc_info.value.message == "Role 'user' cannot remove other member"
    assert exc_info.value.status_code == 403
