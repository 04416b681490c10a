"""Admin endpoints: role check, overviews and forced question deletion."""

import uuid

import pytest


class TestAdminAccess:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/admin/users", "/api/admin/questions"])
    async def test_regular_user_forbidden(self, test_client, alice, path):
        _, headers = alice
        response = await test_client.get(path, headers=headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    @pytest.mark.asyncio
    async def test_anonymous_unauthorized(self, test_client):
        response = await test_client.get("/api/admin/users")
        assert response.status_code == 401


class TestAdminOperations:

    @pytest.mark.asyncio
    async def test_list_users(self, test_client, alice, bob, admin):
        _, headers = admin
        body = (await test_client.get("/api/admin/users", headers=headers)).json()

        usernames = {u["username"] for u in body["users"]}
        assert usernames == {"alice", "bob", "moderator"}
        roles = {u["username"]: u["role"] for u in body["users"]}
        assert roles["moderator"] == "admin"

    @pytest.mark.asyncio
    async def test_list_questions(self, test_client, alice, admin, ask):
        _, alice_headers = alice
        _, admin_headers = admin
        await ask(alice_headers, title="Older")
        await ask(alice_headers, title="Newer")

        body = (await test_client.get("/api/admin/questions", headers=admin_headers)).json()

        assert [q["title"] for q in body["questions"]] == ["Newer", "Older"]
        assert body["questions"][0]["author"]["username"] == "alice"

    @pytest.mark.asyncio
    async def test_delete_question(self, test_client, alice, bob, admin, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        _, admin_headers = admin
        question = await ask(alice_headers, tags=["spam"])
        await answer(bob_headers, question["id"])

        response = await test_client.delete(
            f"/api/admin/questions/{question['id']}", headers=admin_headers
        )

        assert response.status_code == 200
        assert (await test_client.get(f"/api/questions/{question['id']}")).status_code == 404
        tags = (await test_client.get("/api/tags")).json()["tags"]
        assert tags[0]["question_count"] == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_question(self, test_client, admin):
        _, headers = admin
        response = await test_client.delete(f"/api/admin/questions/{uuid.uuid4()}", headers=headers)
        assert response.status_code == 404
