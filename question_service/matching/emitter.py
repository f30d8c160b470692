"""
Reply emitter — publishes match replies to the outbound stream.

The bus client sits behind the ``ReplyPublisher`` protocol so the
handler never touches the process-wide Redis client directly; tests
substitute an in-memory publisher.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from question_service.config import settings
from question_service.schemas.matching import MatchReply

if TYPE_CHECKING:
    import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

# Field name carrying the JSON payload in every stream entry
PAYLOAD_FIELD = "value"


class ReplyPublisher(Protocol):
    async def publish(self, topic: str, payload: str) -> None:
        """Deliver *payload* to *topic*; raise if the bus rejects it."""
        ...


class RedisStreamPublisher:
    """
    Appends payloads to a Redis stream with XADD.

    Accepts a ``redis`` client on construction; falls back to the shared
    client from ``question_service.redis_client``.  The stream is capped
    (approximate MAXLEN) so unread replies cannot grow without bound.
    """

    def __init__(
        self,
        redis_client: "aioredis.Redis | None" = None,
        maxlen: int | None = None,
    ):
        self._redis = redis_client
        self._maxlen = maxlen if maxlen is not None else settings.QUESTION_REPLY_MAXLEN

    @property
    def redis(self) -> "aioredis.Redis":
        if self._redis is not None:
            return self._redis
        from question_service.redis_client import redis as _default
        return _default

    async def publish(self, topic: str, payload: str) -> None:
        await self.redis.xadd(
            topic,
            {PAYLOAD_FIELD: payload},
            maxlen=self._maxlen,
            approximate=True,
        )


class ReplyEmitter:
    """Serializes a ``MatchReply`` and publishes it to the reply topic."""

    def __init__(self, publisher: ReplyPublisher | None = None, topic: str | None = None):
        self.publisher = publisher or RedisStreamPublisher()
        self.topic = topic or settings.QUESTION_REPLY_STREAM

    async def emit(self, reply: MatchReply) -> None:
        """Publish *reply*.  Publisher errors propagate to the caller."""
        await self.publisher.publish(self.topic, reply.to_json())
        logger.info(
            "Sent %s reply for %s to %s",
            reply.status.value, reply.correlation_id, self.topic,
        )
