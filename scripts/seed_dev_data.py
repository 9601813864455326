#!/usr/bin/env python3
"""Seed a development database with members, a team, its memberships and rooms.

Usage:
    uv run python scripts/seed_dev_data.py

Requires HUDDLE_DATABASE_URL (or defaults to localhost). Safe to re-run: an
existing team code or email is left alone.
"""

import asyncio

import structlog

from app.core.database import engine, get_session_context, init_db
from app.core.errors import CodeAlreadyInUse, EmailAlreadyInUse
from app.core.logging import configure_logging
from app.services import members as member_service
from app.services import teams as team_service
from huddle_shared.schemas.members import MemberCreateRequest
from huddle_shared.schemas.teams import TeamCreateRequest

log = structlog.get_logger()

DEV_PASSWORD = "huddle-dev-password"

MEMBERS = [
    ("alice@acme.io", "Alice"),
    ("bob@acme.io", "Bob"),
    ("carol@acme.io", "Carol"),
]
TEAM_CODE = "ACME2026"
ROOMS = ["standup", "design-review"]


async def _seed(session) -> bool:
    members = []
    for email, name in MEMBERS:
        try:
            member = await member_service.create_member(
                MemberCreateRequest(email=email, name=name, password=DEV_PASSWORD),
                session,
            )
        except EmailAlreadyInUse:
            log.info("seed.skipped", reason="member exists", email=email)
            return False
        members.append(member)

    owner, *others = members
    try:
        team = await team_service.create_team(
            TeamCreateRequest(code=TEAM_CODE, name="Acme Robotics"), owner, session
        )
    except CodeAlreadyInUse:
        log.info("seed.skipped", reason="team exists", code=TEAM_CODE)
        return False

    for other in others:
        await team_service.add_member(team.id, other.id, owner, session)
    for room in ROOMS:
        await team_service.add_room_name(team.id, room, session)

    return True


async def seed():
    await init_db()
    try:
        async with get_session_context() as session:
            seeded = await _seed(session)
    finally:
        await engine.dispose()
    if seeded:
        log.info("seed.completed", members=len(MEMBERS), team=TEAM_CODE, rooms=len(ROOMS))


if __name__ == "__main__":
    configure_logging("info", "text")
    asyncio.run(seed())
