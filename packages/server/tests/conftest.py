"""
Shared fixtures: an in-memory SQLite database per test, fake mail and media
collaborators, and an HTTP client wired to the app through dependency
overrides.
"""

from __future__ import annotations

from typing import Optional
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app.core.auth import create_access_token, hash_password
from app.core.database import get_session, init_db, make_engine, make_session_factory
from app.core.mail import get_mail_service
from app.core.media import get_media_storage
from app.core.urls import UrlBuilder, get_url_builder
from app.main import app
from app.models.member import Member

TEST_PASSWORD = "correct-horse-battery"
TEST_BASE_URL = "https://huddle.test"

# bcrypt is slow on purpose; hash once for every member the tests create
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


class FakeMailService:
    def __init__(self):
        self.sent: list[dict] = []

    async def send_team_member_invitation_link(self, email: str, url: str, team_name: str) -> None:
        self.sent.append({"email": email, "url": url, "team_name": team_name})


class FakeMediaStorage:
    region = "ap-northeast-2"

    def generate_presigned_url(self, key, bucket, file_type):
        return f"https://{bucket}.upload.test/{key}?content-type={file_type.content_type}"

    def get_object_url(self, key, bucket):
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{key}"


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
async def engine():
    engine = make_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


def _member_factory():
    counter = {"n": 0}

    def _build(name: Optional[str], email: Optional[str]) -> Member:
        counter["n"] += 1
        return Member(
            email=email or f"member{counter['n']}@acme.io",
            name=name or f"Member {counter['n']}",
            password_hash=_PASSWORD_HASH,
        )

    return _build


@pytest.fixture
def make_member(session):
    """Add a member inside the test's session (service tests)."""
    build = _member_factory()

    async def _make(name: Optional[str] = None, email: Optional[str] = None) -> Member:
        member = build(name, email)
        session.add(member)
        await session.flush()
        return member

    return _make


@pytest.fixture
def create_member(session_factory):
    """Insert and commit a member so HTTP requests can see it (API tests)."""
    build = _member_factory()

    async def _create(name: Optional[str] = None, email: Optional[str] = None) -> Member:
        async with session_factory() as s:
            member = build(name, email)
            s.add(member)
            await s.commit()
            return member

    return _create


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def mailer():
    return FakeMailService()


@pytest.fixture
def media():
    return FakeMediaStorage()


@pytest.fixture
def urls():
    return UrlBuilder(TEST_BASE_URL)


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Session revocation lookups never reach Redis in tests."""
    monkeypatch.setattr("app.core.auth.is_session_revoked", AsyncMock(return_value=False))


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(session_factory, mailer, media, urls):
    async def _get_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_mail_service] = lambda: mailer
    app.dependency_overrides[get_media_storage] = lambda: media
    app.dependency_overrides[get_url_builder] = lambda: urls
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer headers for a member."""

    def _headers(member: Member) -> dict[str, str]:
        token, _ = create_access_token(member.id)
        return {"Authorization": f"Bearer {token}"}

    return _headers
