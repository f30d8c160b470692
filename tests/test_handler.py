"""Tests for the match request handler — one request in, one reply out.

Covers the success path, no-match, validation failures, store faults,
correlation id fidelity, duplicate delivery, and publish failures.
"""

import logging
from unittest.mock import AsyncMock

import pytest

from question_service.matching.config import MSG_FOUND, MSG_INTERNAL_ERROR, MSG_NOT_FOUND
from question_service.matching.errors import ReplyDeliveryError
from question_service.schemas.matching import ReplyStatus, decode_match_request


def _request(cid="abc-1", difficulty="Medium", topics=("Graphs",)):
    return decode_match_request(
        {"correlationId": cid, "meta": {"difficulty": difficulty, "topics": list(topics)}}
    )


def _failing_store(exc=None):
    store = AsyncMock()
    store.find_random_match = AsyncMock(
        side_effect=exc or RuntimeError("connection refused at 10.0.0.5"),
    )
    return store


class TestSuccessPath:

    @pytest.mark.asyncio
    async def test_found_question_reply(self, handler, publisher):
        reply = await handler.handle(_request())

        assert reply.status == ReplyStatus.SUCCESS
        assert reply.message == MSG_FOUND
        assert reply.data.title in {"Q1", "Q2"}

        [payload] = publisher.replies()
        assert payload["correlationId"] == "abc-1"
        assert payload["status"] == "success"
        assert payload["message"] == "Question found successfully."
        assert payload["data"]["title"] == reply.data.title
        assert payload["data"]["difficulty"] == "Medium"
        assert "Graphs" in payload["data"]["topics"]

    @pytest.mark.asyncio
    async def test_only_first_topic_used(self, handler):
        reply = await handler.handle(_request(topics=["Arrays", "Graphs"]))
        assert reply.status == ReplyStatus.SUCCESS
        assert reply.data.title == "Medium arrays"

    @pytest.mark.asyncio
    async def test_duplicate_delivery_gets_independent_replies(self, handler, publisher):
        request = _request(cid="dup-1")
        await handler.handle(request)
        await handler.handle(request)

        replies = publisher.replies()
        assert [r["correlationId"] for r in replies] == ["dup-1", "dup-1"]
        assert {r["status"] for r in replies} == {"success"}


class TestErrorReplies:

    @pytest.mark.asyncio
    async def test_no_match(self, handler, publisher):
        reply = await handler.handle(_request(difficulty="Easy", topics=["Heaps"]))

        assert reply.status == ReplyStatus.ERROR
        assert publisher.replies() == [{
            "correlationId": "abc-1",
            "status": "error",
            "data": None,
            "message": MSG_NOT_FOUND,
        }]

    @pytest.mark.asyncio
    async def test_unknown_difficulty_never_reaches_store(self, make_handler, publisher):
        store = AsyncMock()
        reply = await make_handler(store, publisher).handle(_request(difficulty="Extreme"))

        store.find_random_match.assert_not_awaited()
        assert reply.status == ReplyStatus.ERROR
        assert publisher.replies()[0]["message"] == "Invalid difficulty level: Extreme"

    @pytest.mark.asyncio
    async def test_unknown_topic_never_reaches_store(self, make_handler, publisher):
        store = AsyncMock()
        reply = await make_handler(store, publisher).handle(_request(topics=["Quantum"]))

        store.find_random_match.assert_not_awaited()
        assert reply.message == "Invalid topic: Quantum"

    @pytest.mark.asyncio
    async def test_empty_topics_rejected(self, make_handler, publisher):
        store = AsyncMock()
        reply = await make_handler(store, publisher).handle(_request(topics=[]))

        store.find_random_match.assert_not_awaited()
        assert reply.status == ReplyStatus.ERROR
        assert len(publisher.replies()) == 1

    @pytest.mark.asyncio
    async def test_store_fault_gives_generic_error(self, make_handler, publisher, caplog):
        handler = make_handler(_failing_store(), publisher)
        with caplog.at_level(logging.ERROR):
            reply = await handler.handle(_request(cid="boom-1"))

        assert reply.status == ReplyStatus.ERROR
        [payload] = publisher.replies()
        assert payload["message"] == MSG_INTERNAL_ERROR
        assert payload["data"] is None
        assert "10.0.0.5" not in payload["message"]
        assert "boom-1" in caplog.text
        assert "connection refused" in caplog.text

    @pytest.mark.asyncio
    async def test_unformattable_record_gives_generic_error(
        self, make_handler, make_question, publisher,
    ):
        broken = make_question(examples=[{"output": "missing input"}])
        store = AsyncMock()
        store.find_random_match = AsyncMock(return_value=broken)

        reply = await make_handler(store, publisher).handle(_request())
        assert reply.message == MSG_INTERNAL_ERROR


class TestExactlyOneReply:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "difficulty,topics,store_fails",
        [
            ("Medium", ["Graphs"], False),
            ("Easy", ["Heaps"], False),
            ("Extreme", ["Graphs"], False),
            ("Medium", ["Graphs"], True),
        ],
    )
    async def test_one_reply_with_same_correlation_id(
        self, store, make_handler, make_publisher, difficulty, topics, store_fails,
    ):
        publisher = make_publisher()
        handler = make_handler(_failing_store() if store_fails else store, publisher)
        cid = "c0rr-él-42 "

        await handler.handle(_request(cid=cid, difficulty=difficulty, topics=topics))

        replies = publisher.replies()
        assert len(replies) == 1
        assert replies[0]["correlationId"] == cid


class TestPublishFailure:

    @pytest.mark.asyncio
    async def test_logged_critical_and_raised(self, store, make_handler, make_publisher, caplog):
        handler = make_handler(store, make_publisher(fail=True))

        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(ReplyDeliveryError) as exc_info:
                await handler.handle(_request(cid="lost-1"))

        assert exc_info.value.correlation_id == "lost-1"
        assert isinstance(exc_info.value.cause, ConnectionError)
        critical = [r for r in caplog.records if r.levelno == logging.CRITICAL]
        assert len(critical) == 1
        assert "lost-1" in critical[0].getMessage()

    @pytest.mark.asyncio
    async def test_error_reply_publish_failure_is_critical(
        self, make_handler, make_publisher, caplog,
    ):
        handler = make_handler(_failing_store(), make_publisher(fail=True))

        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(ReplyDeliveryError):
                await handler.handle(_request(cid="lost-2"))

        assert any(
            r.levelno == logging.CRITICAL and "lost-2" in r.getMessage()
            for r in caplog.records
        )

    @pytest.mark.asyncio
    async def test_publish_not_retried(self, store, make_handler):
        publisher = AsyncMock()
        publisher.publish = AsyncMock(side_effect=TimeoutError())

        with pytest.raises(ReplyDeliveryError):
            await make_handler(store, publisher).handle(_request())
        assert publisher.publish.await_count == 1
