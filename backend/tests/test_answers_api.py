"""
StackIt Backend — Answer Endpoint Tests
=========================================

What we test:
    ✅ Creating an answer bumps answer_count and notifies the asker
    ✅ Answering your own question does not notify yourself
    ✅ Listing per question with sort orders
    ✅ Edit/delete permissions; delete keeps answer_count and acceptance in step
    ✅ Accept toggles, replaces the previous accepted answer, notifies its author
"""

import uuid

import pytest


async def get_question(test_client, question_id):
    return (await test_client.get(f"/api/questions/{question_id}")).json()


class TestCreateAnswer:

    @pytest.mark.asyncio
    async def test_create_answer(self, test_client, alice, bob, ask):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers, title="Why is the sky blue?")

        response = await test_client.post(
            "/api/answers",
            json={"question_id": question["id"], "content": "Rayleigh scattering"},
            headers=bob_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Answer created successfully"
        assert body["answer"]["author"]["username"] == "bob"
        assert body["answer"]["is_accepted"] is False
        assert body["answer"]["vote_count"] == 0

        assert (await get_question(test_client, question["id"]))["answer_count"] == 1

        inbox = (await test_client.get("/api/notifications", headers=alice_headers)).json()
        assert inbox["unread_count"] == 1
        notification = inbox["notifications"][0]
        assert notification["type"] == "answer"
        assert notification["entity_type"] == "answer"
        assert notification["entity_id"] == body["answer"]["id"]
        assert notification["actor"]["username"] == "bob"
        assert notification["message"] == 'bob answered your question "Why is the sky blue?"'

    @pytest.mark.asyncio
    async def test_self_answer_does_not_notify(self, test_client, alice, ask, answer):
        _, headers = alice
        question = await ask(headers)
        await answer(headers, question["id"])

        inbox = (await test_client.get("/api/notifications", headers=headers)).json()
        assert inbox["notifications"] == []
        assert inbox["unread_count"] == 0

    @pytest.mark.asyncio
    async def test_unknown_question(self, test_client, alice):
        _, headers = alice
        response = await test_client.post(
            "/api/answers",
            json={"question_id": str(uuid.uuid4()), "content": "Hello"},
            headers=headers,
        )
        assert response.status_code == 404


class TestListAnswers:

    @pytest.mark.asyncio
    async def test_sorted_by_votes_by_default(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        first = await answer(bob_headers, question["id"], content="first")
        second = await answer(bob_headers, question["id"], content="second")
        await test_client.post(
            f"/api/answers/{first['id']}/vote", json={"vote_type": "upvote"}, headers=alice_headers
        )

        body = (await test_client.get(f"/api/answers/question/{question['id']}")).json()
        assert [a["id"] for a in body["answers"]] == [first["id"], second["id"]]
        assert body["pagination"]["total_count"] == 2

        newest = (
            await test_client.get(f"/api/answers/question/{question['id']}", params={"sort": "newest"})
        ).json()
        assert newest["answers"][0]["id"] == second["id"]

    @pytest.mark.asyncio
    async def test_unknown_question(self, test_client):
        response = await test_client.get(f"/api/answers/question/{uuid.uuid4()}")
        assert response.status_code == 404


class TestUpdateDeleteAnswer:

    @pytest.mark.asyncio
    async def test_author_can_edit(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        reply = await answer(bob_headers, question["id"])

        response = await test_client.put(
            f"/api/answers/{reply['id']}", json={"content": "Edited"}, headers=bob_headers
        )
        assert response.status_code == 200
        assert response.json()["answer"]["content"] == "Edited"

        forbidden = await test_client.put(
            f"/api/answers/{reply['id']}", json={"content": "Nope"}, headers=alice_headers
        )
        assert forbidden.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_updates_question(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        reply = await answer(bob_headers, question["id"])
        await test_client.post(f"/api/answers/{reply['id']}/accept", headers=alice_headers)

        response = await test_client.delete(f"/api/answers/{reply['id']}", headers=bob_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Answer deleted successfully"
        detail = await get_question(test_client, question["id"])
        assert detail["answer_count"] == 0
        assert detail["accepted_answer_id"] is None
        assert detail["accepted_answer"] is None

    @pytest.mark.asyncio
    async def test_deleting_other_answer_keeps_acceptance(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        accepted = await answer(bob_headers, question["id"], content="accepted")
        other = await answer(bob_headers, question["id"], content="other")
        await test_client.post(f"/api/answers/{accepted['id']}/accept", headers=alice_headers)

        await test_client.delete(f"/api/answers/{other['id']}", headers=bob_headers)

        detail = await get_question(test_client, question["id"])
        assert detail["accepted_answer_id"] == accepted["id"]
        assert detail["answer_count"] == 1

    @pytest.mark.asyncio
    async def test_question_author_cannot_delete_others_answer(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        reply = await answer(bob_headers, question["id"])

        response = await test_client.delete(f"/api/answers/{reply['id']}", headers=alice_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_can_delete(self, test_client, alice, bob, admin, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        _, admin_headers = admin
        question = await ask(alice_headers)
        reply = await answer(bob_headers, question["id"])

        response = await test_client.delete(f"/api/answers/{reply['id']}", headers=admin_headers)
        assert response.status_code == 200


class TestAcceptAnswer:

    @pytest.mark.asyncio
    async def test_accept_then_unaccept(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers, title="Accept me")
        reply = await answer(bob_headers, question["id"])

        accepted = await test_client.post(f"/api/answers/{reply['id']}/accept", headers=alice_headers)
        assert accepted.status_code == 200
        assert accepted.json() == {"message": "Answer accepted successfully", "accepted": True}

        inbox = (await test_client.get("/api/notifications", headers=bob_headers)).json()
        assert inbox["notifications"][0]["type"] == "accept"
        assert inbox["notifications"][0]["message"] == 'alice accepted your answer to "Accept me"'

        unaccepted = await test_client.post(f"/api/answers/{reply['id']}/accept", headers=alice_headers)
        assert unaccepted.json() == {"message": "Answer unaccepted successfully", "accepted": False}

        detail = await get_question(test_client, question["id"])
        assert detail["accepted_answer_id"] is None
        answers = (await test_client.get(f"/api/answers/question/{question['id']}")).json()["answers"]
        assert answers[0]["is_accepted"] is False

    @pytest.mark.asyncio
    async def test_accepting_another_replaces_previous(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        first = await answer(bob_headers, question["id"], content="first")
        second = await answer(bob_headers, question["id"], content="second")

        await test_client.post(f"/api/answers/{first['id']}/accept", headers=alice_headers)
        await test_client.post(f"/api/answers/{second['id']}/accept", headers=alice_headers)

        detail = await get_question(test_client, question["id"])
        assert detail["accepted_answer_id"] == second["id"]
        answers = (await test_client.get(f"/api/answers/question/{question['id']}")).json()["answers"]
        flags = {a["id"]: a["is_accepted"] for a in answers}
        assert flags == {first["id"]: False, second["id"]: True}

    @pytest.mark.asyncio
    async def test_only_question_author_can_accept(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        reply = await answer(bob_headers, question["id"])

        response = await test_client.post(f"/api/answers/{reply['id']}/accept", headers=bob_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Only the question author can accept answers"
