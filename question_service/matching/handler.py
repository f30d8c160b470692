"""
Match request handler — turns one decoded request into exactly one reply.

States:
    RECEIVED -> VALIDATING -> SELECTING -> REPLYING -> DONE

Every outcome below the publish step ends in a reply:
  invalid criteria  -> error reply carrying the validation message
  no question       -> error reply (MSG_NOT_FOUND)
  question found    -> success reply with the formatted question
  store failure     -> error reply (MSG_INTERNAL_ERROR); details stay in the log

A failed publish is the one outcome with no reply. It is logged as
critical and raised as ``ReplyDeliveryError``; nothing retries it here.
"""

from __future__ import annotations

import enum
import logging

from question_service.matching.config import MSG_FOUND, MSG_INTERNAL_ERROR, MSG_NOT_FOUND
from question_service.matching.emitter import ReplyEmitter
from question_service.matching.errors import InvalidCriteriaError, ReplyDeliveryError
from question_service.matching.selector import CriteriaSelector, validate_criteria
from question_service.schemas.matching import MatchReply, MatchRequest
from question_service.schemas.question import format_question_response

logger = logging.getLogger(__name__)


class HandlerState(str, enum.Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    SELECTING = "selecting"
    REPLYING = "replying"
    DONE = "done"


class MatchRequestHandler:
    """Validates, selects, and replies for a single match request."""

    def __init__(self, selector: CriteriaSelector | None = None, emitter: ReplyEmitter | None = None):
        """
        Args:
            selector: CriteriaSelector (defaults to one over the configured store).
            emitter: ReplyEmitter (defaults to the Redis stream publisher).
        """
        self.selector = selector or CriteriaSelector()
        self.emitter = emitter or ReplyEmitter()

    async def handle(self, request: MatchRequest) -> MatchReply:
        """
        Process *request* and publish its reply.

        Returns the reply that was published.

        Raises:
            ReplyDeliveryError: the reply could not be published.
        """
        cid = request.correlation_id
        state = HandlerState.RECEIVED
        logger.info(
            "Handling request %s for %s and topic %s",
            cid, request.criteria.difficulty, request.criteria.topic,
        )

        state = self._advance(cid, state, HandlerState.VALIDATING)
        reply = None
        try:
            difficulty, topic = validate_criteria(
                request.criteria.difficulty, request.criteria.topics,
            )
        except InvalidCriteriaError as exc:
            logger.warning("Rejected request %s: %s", cid, exc.message)
            reply = MatchReply.error(cid, exc.message)

        if reply is None:
            state = self._advance(cid, state, HandlerState.SELECTING)
            reply = await self._select(cid, difficulty, topic)

        state = self._advance(cid, state, HandlerState.REPLYING)
        try:
            await self.emitter.emit(reply)
        except Exception as exc:
            logger.critical(
                "CRITICAL: failed to notify caller for request %s (%s reply lost)",
                cid, reply.status.value, exc_info=True,
            )
            raise ReplyDeliveryError(cid, exc) from exc

        self._advance(cid, state, HandlerState.DONE)
        return reply

    async def _select(self, cid: str, difficulty, topic) -> MatchReply:
        try:
            question = await self.selector.select(difficulty, topic)
            if question is None:
                logger.warning("No question found for %s", cid)
                return MatchReply.error(cid, MSG_NOT_FOUND)
            return MatchReply.success(cid, format_question_response(question), MSG_FOUND)
        except Exception:
            logger.exception("Error processing request %s", cid)
            return MatchReply.error(cid, MSG_INTERNAL_ERROR)

    @staticmethod
    def _advance(cid: str, current: HandlerState, nxt: HandlerState) -> HandlerState:
        logger.debug("Request %s: %s -> %s", cid, current.value, nxt.value)
        return nxt
