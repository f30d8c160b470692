"""Tests for the read-only question endpoints and the health check."""

import uuid
from unittest.mock import AsyncMock

import pytest

from question_service.main import app
from question_service.services.question_store import get_question_store


class TestRandomQuestion:

    @pytest.mark.asyncio
    async def test_returns_matching_question(self, client):
        resp = await client.get(
            "/api/v1/questions/random", params={"difficulty": "Medium", "topics": "Graphs"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == (
            "Found a random question for the difficulty: Medium and topic: Graphs"
        )
        assert body["data"]["title"] in {"Q1", "Q2"}
        assert body["data"]["problemStatement"]
        assert body["data"]["entryPoint"] == "num_islands"

    @pytest.mark.asyncio
    async def test_no_match(self, client):
        resp = await client.get(
            "/api/v1/questions/random", params={"difficulty": "Easy", "topics": "Heaps"},
        )
        assert resp.status_code == 404
        assert resp.json()["detail"] == "No questions found matching the criteria."

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params,detail",
        [
            ({"topics": "Graphs"}, "Difficulty must be specified"),
            ({"difficulty": "Easy"}, "Topics must be specified"),
            ({"difficulty": "Extreme", "topics": "Graphs"}, "Invalid difficulty level: Extreme"),
            ({"difficulty": "Easy", "topics": "Databases"}, "Invalid topic: Databases"),
        ],
    )
    async def test_bad_parameters(self, client, params, detail):
        resp = await client.get("/api/v1/questions/random", params=params)
        assert resp.status_code == 404
        assert resp.json()["detail"] == detail

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, client):
        failing = AsyncMock()
        failing.find_random_match = AsyncMock(side_effect=RuntimeError("db down"))
        app.dependency_overrides[get_question_store] = lambda: failing

        resp = await client.get(
            "/api/v1/questions/random", params={"difficulty": "Easy", "topics": "Arrays"},
        )
        assert resp.status_code == 500
        assert "db down" not in resp.text


class TestGetQuestions:

    @pytest.mark.asyncio
    async def test_list_all(self, client):
        resp = await client.get("/api/v1/questions")
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Found 4 questions"
        assert [q["title"] for q in body["data"]] == sorted(q["title"] for q in body["data"])

    @pytest.mark.asyncio
    async def test_get_by_id(self, client, graph_questions):
        target = graph_questions[0]
        resp = await client.get(f"/api/v1/questions/{target.id}")
        assert resp.status_code == 200
        assert resp.json()["data"]["id"] == str(target.id)

    @pytest.mark.asyncio
    async def test_unknown_id(self, client):
        missing = uuid.uuid4()
        resp = await client.get(f"/api/v1/questions/{missing}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == f"Question {missing} not found"

    @pytest.mark.asyncio
    async def test_invalid_id(self, client):
        resp = await client.get("/api/v1/questions/not-a-uuid")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "ID not-a-uuid is invalid"

    @pytest.mark.asyncio
    async def test_http_and_bus_share_the_same_shape(self, client, handler, publisher, graph_questions):
        from question_service.schemas.matching import decode_match_request

        reply = await handler.handle(decode_match_request(
            {"correlationId": "shape", "meta": {"difficulty": "Medium", "topics": ["Graphs"]}}
        ))
        resp = await client.get(f"/api/v1/questions/{reply.data.id}")

        assert resp.json()["data"] == publisher.replies()[0]["data"]


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "healthy"
        assert body["service"] == "Question Service"
