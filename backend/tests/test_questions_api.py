"""
StackIt Backend — Question Endpoint Tests
===========================================

What we test:
    ✅ Create with tags (find-or-create, lowercase, de-duplicated counts)
    ✅ Listing: pagination, search, tag filter, sort
    ✅ Detail bumps views and embeds the accepted answer
    ✅ Update/delete permissions and tag counter bookkeeping
    ✅ Delete cascades to answers, votes and notifications
    ✅ my-questions and my-activity
"""

import uuid

import pytest


async def tag_counts(test_client) -> dict:
    response = await test_client.get("/api/tags")
    return {tag["name"]: tag["question_count"] for tag in response.json()["tags"]}


class TestCreateQuestion:

    @pytest.mark.asyncio
    async def test_create_with_tags(self, test_client, alice):
        user, headers = alice
        response = await test_client.post(
            "/api/questions",
            json={
                "title": "What is a coroutine?",
                "description": "Trying to understand async def",
                "tags": ["Python", "asyncio", "python"],
            },
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Question created successfully"
        question = body["question"]
        assert question["author"]["username"] == "alice"
        assert sorted(t["name"] for t in question["tags"]) == ["asyncio", "python"]
        assert question["views"] == 0
        assert question["vote_count"] == 0
        assert question["answer_count"] == 0
        assert question["accepted_answer_id"] is None

        assert await tag_counts(test_client) == {"python": 1, "asyncio": 1}

    @pytest.mark.asyncio
    async def test_existing_tags_are_reused(self, test_client, alice, ask):
        _, headers = alice
        await ask(headers, tags=["python"])
        await ask(headers, title="Second", tags=["python", "sqlalchemy"])

        assert await tag_counts(test_client) == {"python": 2, "sqlalchemy": 1}

    @pytest.mark.asyncio
    async def test_requires_auth(self, test_client):
        response = await test_client.post(
            "/api/questions", json={"title": "t", "description": "d", "tags": []}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_blank_title_is_rejected(self, test_client, alice):
        _, headers = alice
        response = await test_client.post(
            "/api/questions", json={"title": "", "description": "d"}, headers=headers
        )
        assert response.status_code == 422


class TestListQuestions:

    @pytest.mark.asyncio
    async def test_pagination(self, test_client, alice, ask):
        _, headers = alice
        for i in range(3):
            await ask(headers, title=f"Question {i}")

        response = await test_client.get("/api/questions", params={"page": 1, "limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert len(body["questions"]) == 2
        assert body["pagination"] == {
            "current_page": 1,
            "total_pages": 2,
            "total_count": 3,
            "has_more": True,
        }
        assert response.headers["X-Total-Count"] == "3"
        # newest first by default
        assert body["questions"][0]["title"] == "Question 2"

        page_two = (await test_client.get("/api/questions", params={"page": 2, "limit": 2})).json()
        assert [q["title"] for q in page_two["questions"]] == ["Question 0"]
        assert page_two["pagination"]["has_more"] is False

    @pytest.mark.asyncio
    async def test_search_title_and_description(self, test_client, alice, ask):
        _, headers = alice
        await ask(headers, title="FastAPI dependency injection", description="How?")
        await ask(headers, title="Unrelated", description="something about fastapi routers")
        await ask(headers, title="Cooking", description="Pasta")

        body = (await test_client.get("/api/questions", params={"search": "FASTAPI"})).json()

        assert body["pagination"]["total_count"] == 2

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, test_client, alice, ask):
        _, headers = alice
        await ask(headers, title="What does __init__ do?", description="Constructors")
        await ask(headers, title="Cooking", description="Pasta")

        underscore = (await test_client.get("/api/questions", params={"search": "_"})).json()
        percent = (await test_client.get("/api/questions", params={"search": "%"})).json()

        assert [q["title"] for q in underscore["questions"]] == ["What does __init__ do?"]
        assert percent["pagination"]["total_count"] == 0

    @pytest.mark.asyncio
    async def test_filter_by_any_tag(self, test_client, alice, ask):
        _, headers = alice
        await ask(headers, title="A", tags=["python"])
        await ask(headers, title="B", tags=["rust"])
        await ask(headers, title="C", tags=["go"])

        body = (await test_client.get("/api/questions", params={"tags": "Python, rust"})).json()

        assert sorted(q["title"] for q in body["questions"]) == ["A", "B"]

    @pytest.mark.asyncio
    async def test_sort_by_votes_and_oldest(self, test_client, alice, bob, ask):
        _, alice_headers = alice
        _, bob_headers = bob
        first = await ask(alice_headers, title="First")
        second = await ask(alice_headers, title="Second")
        await test_client.post(
            f"/api/questions/{first['id']}/vote", json={"vote_type": "upvote"}, headers=bob_headers
        )

        by_votes = (await test_client.get("/api/questions", params={"sort": "votes"})).json()
        assert by_votes["questions"][0]["id"] == first["id"]

        oldest = (await test_client.get("/api/questions", params={"sort": "oldest"})).json()
        assert oldest["questions"][0]["id"] == first["id"]

        unknown = (await test_client.get("/api/questions", params={"sort": "bogus"})).json()
        assert unknown["questions"][0]["id"] == second["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    async def test_out_of_range_paging(self, test_client, params):
        response = await test_client.get("/api/questions", params=params)
        assert response.status_code == 422


class TestGetQuestion:

    @pytest.mark.asyncio
    async def test_detail_counts_views(self, test_client, alice, ask):
        _, headers = alice
        question = await ask(headers)

        first = (await test_client.get(f"/api/questions/{question['id']}")).json()
        second = (await test_client.get(f"/api/questions/{question['id']}")).json()

        assert first["views"] == 1
        assert second["views"] == 2
        assert second["accepted_answer"] is None

    @pytest.mark.asyncio
    async def test_detail_embeds_accepted_answer(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)
        reply = await answer(bob_headers, question["id"])
        await test_client.post(f"/api/answers/{reply['id']}/accept", headers=alice_headers)

        body = (await test_client.get(f"/api/questions/{question['id']}")).json()

        assert body["accepted_answer_id"] == reply["id"]
        assert body["accepted_answer"]["id"] == reply["id"]
        assert body["accepted_answer"]["is_accepted"] is True

    @pytest.mark.asyncio
    async def test_unknown_question(self, test_client):
        response = await test_client.get(f"/api/questions/{uuid.uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client):
        response = await test_client.get("/api/questions/not-a-uuid")
        assert response.status_code == 422


class TestUpdateQuestion:

    @pytest.mark.asyncio
    async def test_author_updates_and_retags(self, test_client, alice, ask):
        _, headers = alice
        question = await ask(headers, tags=["python", "flask"])

        response = await test_client.put(
            f"/api/questions/{question['id']}",
            json={"title": "Better title", "tags": ["python", "fastapi"]},
            headers=headers,
        )

        assert response.status_code == 200
        updated = response.json()["question"]
        assert updated["title"] == "Better title"
        assert updated["description"] == question["description"]
        assert sorted(t["name"] for t in updated["tags"]) == ["fastapi", "python"]
        assert await tag_counts(test_client) == {"python": 1, "fastapi": 1, "flask": 0}

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, test_client, alice, bob, ask):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)

        response = await test_client.put(
            f"/api/questions/{question['id']}", json={"title": "Hijacked"}, headers=bob_headers
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"


class TestDeleteQuestion:

    @pytest.mark.asyncio
    async def test_delete_cascades(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers, tags=["python"])
        reply = await answer(bob_headers, question["id"])
        await test_client.post(
            f"/api/answers/{reply['id']}/vote", json={"vote_type": "upvote"}, headers=alice_headers
        )
        await test_client.post(
            f"/api/questions/{question['id']}/vote", json={"vote_type": "upvote"}, headers=bob_headers
        )

        response = await test_client.delete(f"/api/questions/{question['id']}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Question deleted successfully"
        assert (await test_client.get(f"/api/questions/{question['id']}")).status_code == 404
        assert (await test_client.get(f"/api/answers/question/{question['id']}")).status_code == 404
        assert await tag_counts(test_client) == {"python": 0}

        bob_profile = (await test_client.get("/api/users/bob")).json()
        assert bob_profile["stats"]["total_answers"] == 0

        # alice was notified about bob's answer; that notification is gone too
        inbox = (await test_client.get("/api/notifications", headers=alice_headers)).json()
        assert inbox["notifications"] == []

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, test_client, alice, bob, ask):
        _, alice_headers = alice
        _, bob_headers = bob
        question = await ask(alice_headers)

        response = await test_client.delete(f"/api/questions/{question['id']}", headers=bob_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_can_delete(self, test_client, alice, admin, ask):
        _, alice_headers = alice
        _, admin_headers = admin
        question = await ask(alice_headers)

        response = await test_client.delete(f"/api/questions/{question['id']}", headers=admin_headers)
        assert response.status_code == 200


class TestMyQuestionsAndActivity:

    @pytest.mark.asyncio
    async def test_my_questions(self, test_client, alice, bob, ask):
        _, alice_headers = alice
        _, bob_headers = bob
        await ask(alice_headers, title="Mine")
        await ask(bob_headers, title="Theirs")

        body = (await test_client.get("/api/questions/my-questions", headers=alice_headers)).json()

        assert [q["title"] for q in body["questions"]] == ["Mine"]

    @pytest.mark.asyncio
    async def test_my_activity_merges_questions_and_answers(self, test_client, alice, bob, ask, answer):
        _, alice_headers = alice
        _, bob_headers = bob
        mine = await ask(alice_headers, title="My question")
        theirs = await ask(bob_headers, title="Bob's question")
        reply = await answer(alice_headers, theirs["id"], content="My answer")

        response = await test_client.get("/api/questions/my-activity", headers=alice_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["stats"] == {"total_questions": 1, "total_answers": 1, "total_activity": 2}
        kinds = [(item["type"], item["id"]) for item in body["activity"]]
        # newest first: the answer was posted after the question
        assert kinds == [("answer", reply["id"]), ("question", mine["id"])]
        assert body["activity"][0]["title"] == "Bob's question"
        assert body["activity"][0]["question_id"] == theirs["id"]

    @pytest.mark.asyncio
    async def test_my_activity_requires_auth(self, test_client):
        response = await test_client.get("/api/questions/my-activity")
        assert response.status_code == 401
