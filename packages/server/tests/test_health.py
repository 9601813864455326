"""
Health check endpoint tests.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Health endpoint should return status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_ready_check(client: AsyncClient):
    """Ready endpoint should reach the database."""
    response = await client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


@pytest.mark.asyncio
async def test_api_root(client: AsyncClient):
    """API v1 root should return version and endpoint list."""
    response = await client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["api"] == "v1"
    assert "/teams" in data["endpoints"]


@pytest.mark.asyncio
async def test_request_id_and_security_headers(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_cookie_session_requires_csrf_token(client: AsyncClient):
    client.cookies.set("huddle_session", "token")
    client.cookies.set("huddle_csrf", "csrf-value")

    response = await client.post("/api/v1/teams", json={"code": "ABC123", "name": "A"})
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "CSRF_VALIDATION_FAILED"

    response = await client.post(
        "/api/v1/teams",
        json={"code": "ABC123", "name": "A"},
        headers={"X-CSRF-Token": "csrf-value"},
    )
    # Passes the CSRF check, then fails on the bogus session token
    assert response.status_code == 401
