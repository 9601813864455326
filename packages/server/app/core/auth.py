"""
Authentication for Huddle.

Supports:
- Email/Password login with bcrypt password hashes
- JWT sessions, sent as ``Authorization: Bearer`` or the session cookie
- Session revocation through the Redis revocation list

Authorization (team roles) lives in ``app.core.permissions``; this module only
answers "who is calling".
"""

from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
import structlog
from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_session
from app.core.errors import AuthenticationRequired
from app.core.redis import is_session_revoked
from app.models.member import Member

log = structlog.get_logger()
settings = get_settings()

SESSION_COOKIE = "huddle_session"
CSRF_COOKIE = "huddle_csrf"

authorization_header = APIKeyHeader(name="Authorization", auto_error=False)

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a password using bcrypt with cost factor 12."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=12)).decode()


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode(), hashed.encode())


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------

def create_access_token(
    member_id: int,
    *,
    expires_delta: timedelta | None = None,
) -> tuple[str, str]:
    """Create a signed session token. Returns (token, jti)."""
    jti = str(uuid.uuid4())
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": str(member_id),
        "iat": now,
        "exp": exp,
        "jti": jti,
    }
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    return token, jti


def decode_access_token(token: str) -> dict:
    """Decode and verify a session token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


def generate_csrf_token() -> str:
    return secrets.token_urlsafe(32)


def extract_token(request: Request, authorization: Optional[str]) -> Optional[str]:
    """Bearer header wins over the session cookie."""
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip() or None
    return request.cookies.get(SESSION_COOKIE)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

async def get_current_member(
    request: Request,
    authorization: Optional[str] = Depends(authorization_header),
    session: AsyncSession = Depends(get_session),
) -> Member:
    """Resolve the authenticated member for this request.

    The result is handed to service functions explicitly; nothing below the
    router looks the caller up on its own.
    """
    token = extract_token(request, authorization)
    if not token:
        raise AuthenticationRequired()

    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise AuthenticationRequired("Invalid or expired session")

    jti = payload.get("jti")
    if jti and await is_session_revoked(jti):
        raise AuthenticationRequired("Session has been revoked")

    try:
        member_id = int(payload["sub"])
    except (KeyError, ValueError):
        raise AuthenticationRequired("Invalid or expired session")

    member = await session.get(Member, member_id)
    if member is None:
        raise AuthenticationRequired("Member no longer exists")

    structlog.contextvars.bind_contextvars(member_id=member.id)
    return member
