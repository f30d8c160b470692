"""Exceptions raised along the matching request/reply path."""


class MalformedRequestError(Exception):
    """The inbound envelope cannot be decoded into a match request.

    Nothing is sent back for these: without a trustworthy envelope there
    is no caller to answer.
    """


class InvalidCriteriaError(Exception):
    """Difficulty or topic is not one of the recognized values."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ReplyDeliveryError(Exception):
    """A reply could not be published; its caller will never hear back."""

    def __init__(self, correlation_id: str, cause: Exception | None = None):
        super().__init__(f"Failed to publish reply for {correlation_id}")
        self.correlation_id = correlation_id
        self.cause = cause
