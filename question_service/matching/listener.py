"""
Match request listener — consumes the inbound request stream.

Reads ``matching-requests`` through a Redis consumer group, decodes each
entry and hands it to ``MatchRequestHandler`` as its own asyncio task.

Delivery:
  - entries are acknowledged (XACK) once the handler has published a reply
  - malformed entries are logged, acknowledged and dropped without a reply
  - if the reply could not be published the entry stays pending, so a
    restarted consumer reads it again (pending entries are replayed on start)

In-flight tasks are bounded by a semaphore and are never cancelled;
``stop()`` stops reading and waits for them to finish.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from redis.exceptions import ResponseError

from question_service.config import settings
from question_service.matching.emitter import PAYLOAD_FIELD
from question_service.matching.errors import MalformedRequestError, ReplyDeliveryError
from question_service.matching.handler import MatchRequestHandler
from question_service.schemas.matching import decode_match_request

if TYPE_CHECKING:
    import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

RETRY_DELAY_SECONDS = 1.0
NEW_ENTRIES = ">"
PENDING_ENTRIES = "0"


class MatchRequestListener:
    """Consumer-group reader dispatching match requests to the handler."""

    def __init__(
        self,
        handler: MatchRequestHandler | None = None,
        redis_client: "aioredis.Redis | None" = None,
        stream: str | None = None,
        group: str | None = None,
        consumer: str | None = None,
        read_count: int | None = None,
        block_ms: int | None = None,
        max_in_flight: int | None = None,
    ):
        self.handler = handler or MatchRequestHandler()
        self._redis = redis_client
        self.stream = stream or settings.MATCHING_REQUEST_STREAM
        self.group = group or settings.MATCHING_CONSUMER_GROUP
        self.consumer = consumer or settings.MATCHING_CONSUMER_NAME
        self.read_count = read_count or settings.MATCHING_READ_COUNT
        self.block_ms = block_ms if block_ms is not None else settings.MATCHING_BLOCK_MS
        self._slots = asyncio.Semaphore(max_in_flight or settings.MATCHING_MAX_IN_FLIGHT)
        self._tasks: set[asyncio.Task] = set()
        self._running = False

    @property
    def redis(self) -> "aioredis.Redis":
        if self._redis is not None:
            return self._redis
        from question_service.redis_client import redis as _default
        return _default

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    # ── lifecycle ────────────────────────────────────────────────────────

    async def ensure_group(self) -> None:
        """Create the consumer group (and stream) unless it already exists."""
        try:
            await self.redis.xgroup_create(self.stream, self.group, id="0", mkstream=True)
            logger.info("Created consumer group %s on %s", self.group, self.stream)
        except ResponseError as exc:
            if "BUSYGROUP" not in str(exc):
                raise

    async def run(self) -> None:
        """Consume until ``stop()`` is called."""
        self._running = True
        while self._running:
            try:
                await self.ensure_group()
                break
            except Exception:
                logger.exception("Could not set up consumer group on %s; retrying", self.stream)
                await asyncio.sleep(RETRY_DELAY_SECONDS)
        if not self._running:
            logger.info("Listener on %s stopped before it started", self.stream)
            return
        logger.info(
            "Listening on %s as %s/%s", self.stream, self.group, self.consumer,
        )

        try:
            await self.replay_pending()
        except Exception:
            logger.exception("Replaying pending entries on %s failed", self.stream)

        while self._running:
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Reading from %s failed; retrying", self.stream)
                await asyncio.sleep(RETRY_DELAY_SECONDS)

        await self.drain()
        logger.info("Listener on %s stopped", self.stream)

    def request_stop(self) -> None:
        """Stop reading new entries; ``run()`` drains in-flight requests and returns."""
        self._running = False

    async def stop(self) -> None:
        """Stop reading new entries and wait for in-flight requests."""
        self.request_stop()
        await self.drain()

    async def drain(self) -> None:
        """Wait for all dispatched requests to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ── reading ──────────────────────────────────────────────────────────

    async def replay_pending(self) -> int:
        """
        Re-handle entries delivered to this consumer but never acknowledged.

        Pages through the pending list once; entries that fail again stay
        pending for the next start.  Returns the number replayed.
        """
        last_id = PENDING_ENTRIES
        replayed = 0
        while True:
            entries = await self._read(last_id, block=None)
            if not entries:
                break
            for message_id, fields in entries:
                await self.dispatch(message_id, fields)
                last_id = message_id
                replayed += 1
        await self.drain()
        if replayed:
            logger.info("Replayed %d pending entries from %s", replayed, self.stream)
        return replayed

    async def poll_once(self) -> int:
        """
        Block for one batch of new entries and dispatch every entry in it.

        Returns the number of entries read.
        """
        entries = await self._read(NEW_ENTRIES, block=self.block_ms)
        for message_id, fields in entries:
            await self.dispatch(message_id, fields)
        return len(entries)

    async def _read(self, entry_id: str, block: int | None) -> list:
        response = await self.redis.xreadgroup(
            self.group,
            self.consumer,
            {self.stream: entry_id},
            count=self.read_count,
            block=block,
        )
        entries = []
        for _stream, stream_entries in response or []:
            entries.extend(stream_entries)
        return entries

    async def dispatch(self, message_id: str, fields: dict | None) -> asyncio.Task:
        """Run ``process_entry`` as a task once an in-flight slot is free."""
        await self._slots.acquire()
        task = asyncio.create_task(self._run_slot(message_id, fields))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_slot(self, message_id: str, fields: dict | None) -> None:
        try:
            await self.process_entry(message_id, fields)
        finally:
            self._slots.release()

    # ── per-entry processing ─────────────────────────────────────────────

    async def process_entry(self, message_id: str, fields: dict | None) -> bool:
        """
        Decode and handle one stream entry.

        Returns True if the entry was acknowledged.
        """
        raw = (fields or {}).get(PAYLOAD_FIELD)
        try:
            request = decode_match_request(raw)
        except MalformedRequestError as exc:
            logger.warning(
                "Received invalid matching request %s (%s): %r", message_id, exc, raw,
            )
            return await self._ack(message_id)

        try:
            await self.handler.handle(request)
        except ReplyDeliveryError:
            logger.error(
                "Reply for %s not delivered; leaving entry %s pending",
                request.correlation_id, message_id,
            )
            return False
        except Exception:
            logger.exception(
                "Unexpected failure handling %s; leaving entry %s pending",
                request.correlation_id, message_id,
            )
            return False

        return await self._ack(message_id)

    async def _ack(self, message_id: str) -> bool:
        try:
            await self.redis.xack(self.stream, self.group, message_id)
            return True
        except Exception:
            # Redelivery will produce a duplicate reply, which callers dedupe
            logger.exception("Failed to acknowledge entry %s", message_id)
            return False
