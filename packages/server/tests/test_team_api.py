"""
Integration tests for the team endpoints.

Tests cover:
- Team CRUD through HTTP and the error envelope
- Invitation flow (send, follow link, list teams)
- Membership and meeting room endpoints
- Pagination query parameters
"""

from __future__ import annotations

import pytest


@pytest.fixture
async def owner(create_member):
    return await create_member("Owner", "owner@acme.io")


@pytest.fixture
async def other(create_member):
    return await create_member("Other", "other@acme.io")


@pytest.fixture
async def team_id(client, owner, auth_headers):
    resp = await client.post(
        "/api/v1/teams",
        json={"code": "ABC123", "name": "Alpha"},
        headers=auth_headers(owner),
    )
    assert resp.status_code == 201
    return resp.json()["id"]


class TestTeamCrud:
    async def test_create_requires_auth(self, client):
        resp = await client.post("/api/v1/teams", json={"code": "ABC123", "name": "Alpha"})
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "AUTHENTICATION_REQUIRED"

    async def test_create_validates_code(self, client, owner, auth_headers):
        resp = await client.post(
            "/api/v1/teams",
            json={"code": "a b", "name": "Alpha"},
            headers=auth_headers(owner),
        )
        assert resp.status_code == 422

    async def test_duplicate_code_conflicts(self, client, team_id, other, auth_headers):
        resp = await client.post(
            "/api/v1/teams",
            json={"code": "ABC123", "name": "Beta"},
            headers=auth_headers(other),
        )
        assert resp.status_code == 409
        assert resp.json() == {
            "error": {
                "code": "CODE_ALREADY_IN_USE",
                "message": "Team code is already in use",
                "status": 409,
            }
        }

    async def test_read(self, client, team_id, owner, auth_headers):
        resp = await client.get(f"/api/v1/teams/{team_id}", headers=auth_headers(owner))
        assert resp.status_code == 200
        assert resp.json() == {
            "id": team_id,
            "code": "ABC123",
            "name": "Alpha",
            "open_meetings": [],
            "profile_image_url": None,
        }

    async def test_read_by_outsider_forbidden(self, client, team_id, other, auth_headers):
        resp = await client.get(f"/api/v1/teams/{team_id}", headers=auth_headers(other))
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "MEMBER_NOT_IN_TEAM"

    async def test_read_unknown(self, client, owner, auth_headers):
        resp = await client.get("/api/v1/teams/9999", headers=auth_headers(owner))
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "TEAM_NOT_EXISTS"

    async def test_rename(self, client, team_id, owner, auth_headers):
        resp = await client.patch(
            f"/api/v1/teams/{team_id}", json={"name": "Renamed"}, headers=auth_headers(owner)
        )
        assert resp.status_code == 200
        resp = await client.get(f"/api/v1/teams/{team_id}", headers=auth_headers(owner))
        assert resp.json()["name"] == "Renamed"

    async def test_image(self, client, team_id, owner, auth_headers):
        resp = await client.post(f"/api/v1/teams/{team_id}/image", headers=auth_headers(owner))
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == team_id
        assert body["image_url"] == (
            f"https://huddle-images.s3.ap-northeast-2.amazonaws.com/team_{team_id}.png"
        )

        resp = await client.get(f"/api/v1/teams/{team_id}", headers=auth_headers(owner))
        assert resp.json()["profile_image_url"] == body["image_url"]

    async def test_delete(self, client, team_id, owner, other, auth_headers):
        await client.post(
            f"/api/v1/teams/{team_id}/members",
            json={"member_id": other.id},
            headers=auth_headers(owner),
        )

        resp = await client.delete(f"/api/v1/teams/{team_id}", headers=auth_headers(other))
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "OPERATION_NOT_ALLOWED"

        resp = await client.delete(f"/api/v1/teams/{team_id}", headers=auth_headers(owner))
        assert resp.status_code == 204

        for former in (owner, other):
            resp = await client.get(f"/api/v1/teams/{team_id}", headers=auth_headers(former))
            assert resp.status_code == 404


class TestInvitation:
    async def test_invite_join_and_list(
        self, client, team_id, owner, other, mailer, auth_headers
    ):
        resp = await client.post(
            f"/api/v1/teams/{team_id}/members/invitation",
            json={"member_email": other.email},
            headers=auth_headers(owner),
        )
        assert resp.status_code == 202
        assert len(mailer.sent) == 1
        link = mailer.sent[0]["url"]
        assert link.endswith(f"/api/v1/teams/{team_id}/members/invitation?memberId={other.id}")

        # Following the link needs no session
        path = link.removeprefix("https://huddle.test")
        resp = await client.get(path)
        assert resp.status_code == 200
        assert resp.json() == {"team_id": team_id, "member_id": other.id}

        resp = await client.get(path)
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "MEMBER_ALREADY_JOINED"

        resp = await client.get("/api/v1/teams", headers=auth_headers(other))
        assert resp.status_code == 200
        body = resp.json()
        assert [item["team_id"] for item in body["data"]] == [team_id]
        assert body["data"][0]["role"] == "user"
        assert body["page"]["is_last"] is True

    async def test_invite_by_user_forbidden(
        self, client, team_id, owner, other, create_member, mailer, auth_headers
    ):
        await client.post(
            f"/api/v1/teams/{team_id}/members",
            json={"member_id": other.id},
            headers=auth_headers(owner),
        )
        invitee = await create_member()
        resp = await client.post(
            f"/api/v1/teams/{team_id}/members/invitation",
            json={"member_email": invitee.email},
            headers=auth_headers(other),
        )
        assert resp.status_code == 403
        assert mailer.sent == []

    async def test_invite_unknown_email(self, client, team_id, owner, auth_headers):
        resp = await client.post(
            f"/api/v1/teams/{team_id}/members/invitation",
            json={"member_email": "ghost@acme.io"},
            headers=auth_headers(owner),
        )
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "MEMBER_NOT_EXISTS"


class TestMembers:
    async def test_add_list_and_leave(self, client, team_id, owner, other, auth_headers):
        resp = await client.post(
            f"/api/v1/teams/{team_id}/members",
            json={"member_id": other.id},
            headers=auth_headers(owner),
        )
        assert resp.status_code == 201

        resp = await client.get(f"/api/v1/teams/{team_id}/members", headers=auth_headers(other))
        assert resp.status_code == 200
        assert [(m["member_id"], m["role"]) for m in resp.json()["data"]] == [
            (owner.id, "owner"),
            (other.id, "user"),
        ]

        resp = await client.delete(
            f"/api/v1/teams/{team_id}/members/{other.id}", headers=auth_headers(other)
        )
        assert resp.status_code == 204

        resp = await client.get(f"/api/v1/teams/{team_id}", headers=auth_headers(other))
        assert resp.status_code == 403

    async def test_add_twice_conflicts(self, client, team_id, owner, other, auth_headers):
        for expected in (201, 409):
            resp = await client.post(
                f"/api/v1/teams/{team_id}/members",
                json={"member_id": other.id},
                headers=auth_headers(owner),
            )
            assert resp.status_code == expected


class TestMeetings:
    async def test_open_and_close_room(self, client, team_id, owner, auth_headers):
        headers = auth_headers(owner)
        resp = await client.post(
            f"/api/v1/teams/{team_id}/meetings", json={"room_name": "standup"}, headers=headers
        )
        assert resp.status_code == 200
        assert resp.json() == {"id": team_id}

        resp = await client.post(
            f"/api/v1/teams/{team_id}/meetings", json={"room_name": "standup"}, headers=headers
        )
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "ROOM_NAME_ALREADY"

        resp = await client.get(f"/api/v1/teams/{team_id}", headers=headers)
        assert resp.json()["open_meetings"] == ["standup"]

        resp = await client.delete(f"/api/v1/teams/{team_id}/meetings/standup", headers=headers)
        assert resp.status_code == 204

        resp = await client.delete(f"/api/v1/teams/{team_id}/meetings/standup", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "ROOM_NAME_NOT_EXISTS"


    async def test_room_name_with_slash(self, client, team_id, owner, auth_headers):
        headers = auth_headers(owner)
        resp = await client.post(
            f"/api/v1/teams/{team_id}/meetings",
            json={"room_name": "design/review"},
            headers=headers,
        )
        assert resp.status_code == 200

        resp = await client.delete(
            f"/api/v1/teams/{team_id}/meetings/design%2Freview", headers=headers
        )
        assert resp.status_code == 204

        resp = await client.get(f"/api/v1/teams/{team_id}", headers=headers)
        assert resp.json()["open_meetings"] == []


class TestListing:
    async def test_page_params(self, client, owner, auth_headers):
        headers = auth_headers(owner)
        for i in range(3):
            await client.post(
                "/api/v1/teams", json={"code": f"LIST000{i}", "name": f"T{i}"}, headers=headers
            )

        resp = await client.get(
            "/api/v1/teams", params={"pageIndex": 0, "pageSize": 2}, headers=headers
        )
        body = resp.json()
        assert [item["code"] for item in body["data"]] == ["LIST0002", "LIST0001"]
        assert body["page"] == {"page_index": 0, "page_size": 2, "top_id": 0, "is_last": False}

        top_id = body["data"][0]["membership_id"]
        resp = await client.get(
            "/api/v1/teams",
            params={"pageIndex": 1, "pageSize": 2, "topId": top_id + 1},
            headers=headers,
        )
        body = resp.json()
        assert [item["code"] for item in body["data"]] == ["LIST0000"]
        assert body["page"]["is_last"] is True

    async def test_rejects_bad_page_size(self, client, owner, auth_headers):
        resp = await client.get(
            "/api/v1/teams", params={"pageSize": 0}, headers=auth_headers(owner)
        )
        assert resp.status_code == 422
