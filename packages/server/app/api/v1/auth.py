"""
Authentication endpoints.

- Email/Password login issuing a JWT session (cookie + bearer token)
- Logout, which revokes the session's token id
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import jwt
import structlog
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import (
    CSRF_COOKIE,
    SESSION_COOKIE,
    authorization_header,
    create_access_token,
    decode_access_token,
    extract_token,
    generate_csrf_token,
    get_current_member,
)
from app.core.config import get_settings
from app.core.database import get_session
from app.core.redis import revoke_session
from app.models.member import Member
from app.services import members as member_service
from huddle_shared.schemas.members import AuthResponse, LoginRequest, MemberResponse

log = structlog.get_logger()
settings = get_settings()
router = APIRouter()

COOKIE_KWARGS = {
    "secure": not settings.debug,  # allow non-HTTPS in dev
    "samesite": "lax",
    "path": "/",
    "max_age": settings.jwt_expire_minutes * 60,
}


def _set_session_cookies(response: Response, token: str, csrf: str) -> None:
    response.set_cookie(key=SESSION_COOKIE, value=token, httponly=True, **COOKIE_KWARGS)
    # JS reads the CSRF cookie and echoes it in X-CSRF-Token
    response.set_cookie(key=CSRF_COOKIE, value=csrf, httponly=False, **COOKIE_KWARGS)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_session),
):
    """Authenticate with email/password and receive a JWT session."""
    member = await member_service.authenticate(body.email, body.password, session)
    token, _jti = create_access_token(member.id)
    _set_session_cookies(response, token, generate_csrf_token())
    return AuthResponse(member_id=member.id, email=member.email, access_token=token)


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    authorization: Optional[str] = Depends(authorization_header),
):
    """Invalidate the current session."""
    token = extract_token(request, authorization)
    if token:
        try:
            payload = decode_access_token(token)
        except jwt.PyJWTError:
            payload = {}  # already unusable, just clear cookies
        jti = payload.get("jti")
        if jti:
            remaining = int(payload["exp"] - datetime.now(timezone.utc).timestamp())
            await revoke_session(jti, remaining)
            log.info("auth.logout", member_id=payload.get("sub"))

    response.delete_cookie(SESSION_COOKIE, path="/")
    response.delete_cookie(CSRF_COOKIE, path="/")
    return {"message": "Logged out"}


@router.get("/me", response_model=MemberResponse)
async def me(member: Member = Depends(get_current_member)):
    return MemberResponse.model_validate(member)
