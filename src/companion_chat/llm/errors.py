"""Error types raised by the chat client."""

from typing import Optional

GENERIC_REQUEST_ERROR = "API request failed"
GENERIC_UNKNOWN_ERROR = "Unknown error"


class ChatClientError(Exception):
    """Base class for chat client failures."""


class RequestError(ChatClientError):
    """The upstream API answered with a non-success status."""

    def __init__(self, message: str = GENERIC_REQUEST_ERROR, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnknownError(ChatClientError):
    """Any other failure: transport errors, unreadable bodies, raising callbacks."""

    @classmethod
    def wrap(cls, exc: BaseException) -> ChatClientError:
        """Return *exc* unchanged if it is already a chat client error, else wrap it."""
        if isinstance(exc, ChatClientError):
            return exc
        wrapped = cls(str(exc) or GENERIC_UNKNOWN_ERROR)
        wrapped.__cause__ = exc
        return wrapped
