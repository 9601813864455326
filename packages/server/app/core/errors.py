"""
Domain errors and their HTTP rendering.

Services raise these; ``huddle_error_handler`` turns every one of them into
the ``{"error": {"code", "message", "status"}}`` envelope.
"""

from __future__ import annotations

from typing import Optional

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse

from huddle_shared.schemas.common import ErrorBody, ErrorResponse

log = structlog.get_logger()


class HuddleError(Exception):
    """Base class for every error a service may surface to a client."""

    status_code: int = 400
    code: str = "BAD_REQUEST"
    message: str = "Bad request"

    def __init__(self, message: Optional[str] = None, details: Optional[dict] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


# ---------------------------------------------------------------------------
# 404
# ---------------------------------------------------------------------------

class TeamNotExists(HuddleError):
    status_code = 404
    code = "TEAM_NOT_EXISTS"
    message = "Team does not exist"


class MemberNotExists(HuddleError):
    status_code = 404
    code = "MEMBER_NOT_EXISTS"
    message = "Member does not exist"


class RoomNameNotExists(HuddleError):
    status_code = 404
    code = "ROOM_NAME_NOT_EXISTS"
    message = "Meeting room is not open in this team"


class WhiteboardNotExists(HuddleError):
    status_code = 404
    code = "WHITEBOARD_NOT_EXISTS"
    message = "Whiteboard does not exist"


# ---------------------------------------------------------------------------
# 403
# ---------------------------------------------------------------------------

class MemberNotInTeam(HuddleError):
    status_code = 403
    code = "MEMBER_NOT_IN_TEAM"
    message = "Member does not belong to this team"


class OperationNotAllowed(HuddleError):
    status_code = 403
    code = "OPERATION_NOT_ALLOWED"
    message = "Operation not allowed for this member"


# ---------------------------------------------------------------------------
# 409
# ---------------------------------------------------------------------------

class CodeAlreadyInUse(HuddleError):
    status_code = 409
    code = "CODE_ALREADY_IN_USE"
    message = "Team code is already in use"


class MemberAlreadyJoined(HuddleError):
    status_code = 409
    code = "MEMBER_ALREADY_JOINED"
    message = "Member has already joined this team"


class RoomNameAlready(HuddleError):
    status_code = 409
    code = "ROOM_NAME_ALREADY"
    message = "Meeting room is already open in this team"


class EmailAlreadyInUse(HuddleError):
    status_code = 409
    code = "EMAIL_ALREADY_IN_USE"
    message = "Email is already registered"


# ---------------------------------------------------------------------------
# 401 / 400
# ---------------------------------------------------------------------------

class AuthenticationRequired(HuddleError):
    status_code = 401
    code = "AUTHENTICATION_REQUIRED"
    message = "Authentication required"


class InvalidCredentials(HuddleError):
    status_code = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid email or password"


class InvalidScope(HuddleError):
    status_code = 400
    code = "INVALID_SCOPE"
    message = "Team-scoped whiteboards need a team"


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------

async def huddle_error_handler(request: Request, exc: HuddleError) -> JSONResponse:
    log.info(
        "request.rejected",
        path=request.url.path,
        code=exc.code,
        status=exc.status_code,
    )
    body = ErrorResponse(
        error=ErrorBody(code=exc.code, message=exc.message, status=exc.status_code),
        details=exc.details,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )
