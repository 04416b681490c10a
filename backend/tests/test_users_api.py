"""
StackIt Backend — User Endpoint Tests
=======================================

What we test:
    ✅ Own profile read/update under /api/users/profile
    ✅ Renaming to a name shadowed by /api/users/profile is refused
    ✅ Public profile hides the email and carries activity stats
    ✅ A user's questions and answers (answers include their question)
    ✅ Unknown username → 404
"""

import pytest


class TestOwnProfile:

    @pytest.mark.asyncio
    async def test_get_my_profile(self, test_client, alice):
        user, headers = alice
        response = await test_client.get("/api/users/profile", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == user["id"]
        assert body["email"] == "alice@example.com"

    @pytest.mark.asyncio
    async def test_rename(self, test_client, alice):
        _, headers = alice
        response = await test_client.put(
            "/api/users/profile", json={"username": "alice_w"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["user"]["username"] == "alice_w"
        assert (await test_client.get("/api/users/alice_w")).status_code == 200
        assert (await test_client.get("/api/users/alice")).status_code == 404

    @pytest.mark.asyncio
    async def test_rename_to_reserved_name(self, test_client, alice):
        _, headers = alice
        response = await test_client.put(
            "/api/users/profile", json={"username": "profile"}, headers=headers
        )

        assert response.status_code == 400
        assert (await test_client.get("/api/users/alice")).status_code == 200

    @pytest.mark.asyncio
    async def test_keeping_own_username_is_fine(self, test_client, alice):
        _, headers = alice
        response = await test_client.put(
            "/api/users/profile", json={"username": "alice", "bio": "hi"}, headers=headers
        )
        assert response.status_code == 200


class TestPublicProfile:

    @pytest.mark.asyncio
    async def test_public_profile(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        await answer(alice_headers, question["id"])
        await test_client.post(
            f"/api/questions/{question['id']}/vote", json={"vote_type": "downvote"}, headers=bob_headers
        )

        response = await test_client.get("/api/users/alice")

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["username"] == "alice"
        assert "email" not in body["user"]
        assert body["stats"] == {"total_questions": 1, "total_answers": 1, "total_votes": -1}

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client):
        response = await test_client.get("/api/users/nobody")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestUserContent:

    @pytest.mark.asyncio
    async def test_user_questions(self, test_client, alice, bob, ask):
        _, alice_headers = alice
        _, bob_headers = bob
        await ask(alice_headers, title="Older")
        await ask(alice_headers, title="Newer")
        await ask(bob_headers, title="Not alice's")

        body = (await test_client.get("/api/users/alice/questions")).json()

        assert [q["title"] for q in body["questions"]] == ["Newer", "Older"]
        assert body["pagination"]["total_count"] == 2

    @pytest.mark.asyncio
    async def test_user_answers_include_question(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers, title="Where is my answer?")
        reply = await answer(bob_headers, question["id"])

        body = (await test_client.get("/api/users/bob/answers")).json()

        assert len(body["answers"]) == 1
        assert body["answers"][0]["id"] == reply["id"]
        assert body["answers"][0]["question"] == {"id": question["id"], "title": "Where is my answer?"}

    @pytest.mark.asyncio
    async def test_unknown_user_content(self, test_client):
        assert (await test_client.get("/api/users/nobody/questions")).status_code == 404
        assert (await test_client.get("/api/users/nobody/answers")).status_code == 404
