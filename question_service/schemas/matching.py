"""
Pydantic envelopes for the matching bus.

Inbound  ``matching-requests``:
    {"correlationId": str, "meta": {"difficulty": str, "topics": [str, ...]}}

Outbound ``question-replies``:
    {"correlationId": str, "status": "success" | "error",
     "data": QuestionRecord | null, "message": str}
"""

import enum
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from question_service.matching.errors import MalformedRequestError
from question_service.schemas.question import QuestionRecord


class ReplyStatus(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"


class MatchCriteria(BaseModel):
    """
    Filter issued by the pairing service. Only the first topic is used.

    Values are kept as sent and checked by ``validate_criteria``. A null
    or empty difficulty or topics field makes the envelope malformed.
    """
    difficulty: Any
    topics: list[Any]

    @field_validator("difficulty", mode="before")
    @classmethod
    def _require_difficulty(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("difficulty must be set")
        return value

    @field_validator("topics", mode="before")
    @classmethod
    def _require_topics(cls, value: Any) -> list[Any]:
        if value is None or value == "":
            raise ValueError("topics must be set")
        if not isinstance(value, list):
            return [value]
        return value

    @property
    def topic(self) -> Any:
        return self.topics[0] if self.topics else None


class MatchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    correlation_id: str = Field(alias="correlationId", min_length=1)
    criteria: MatchCriteria = Field(alias="meta")


class MatchReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    correlation_id: str = Field(alias="correlationId")
    status: ReplyStatus
    data: QuestionRecord | None = None
    message: str

    @classmethod
    def success(cls, correlation_id: str, data: QuestionRecord, message: str) -> "MatchReply":
        return cls(
            correlation_id=correlation_id,
            status=ReplyStatus.SUCCESS,
            data=data,
            message=message,
        )

    @classmethod
    def error(cls, correlation_id: str, message: str) -> "MatchReply":
        return cls(
            correlation_id=correlation_id,
            status=ReplyStatus.ERROR,
            data=None,
            message=message,
        )

    def to_json(self) -> str:
        """Serialize to the camelCase wire payload."""
        return self.model_dump_json(by_alias=True)


def decode_match_request(raw: str | bytes | dict) -> MatchRequest:
    """
    Decode a raw bus payload into a ``MatchRequest``.

    Raises:
        MalformedRequestError: payload is not JSON, or lacks the
            correlation id, ``meta.difficulty`` or ``meta.topics``.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise MalformedRequestError(f"Payload is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise MalformedRequestError(
            f"Payload must be a JSON object, got {type(raw).__name__}"
        )

    try:
        return MatchRequest.model_validate(raw)
    except ValidationError as exc:
        missing = ", ".join(
            ".".join(str(part) for part in err["loc"]) for err in exc.errors()
        )
        raise MalformedRequestError(f"Invalid matching request fields: {missing}") from exc
