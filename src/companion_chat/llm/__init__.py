"""Chat completion client."""

from .base import BaseChatClient
from .client import DEFAULT_API_URL, ChatClient, estimate_tokens
from .errors import ChatClientError, RequestError, UnknownError
from .types import ChatPayload, GenerationDefaults, Message, StreamEvent

__all__ = [
    "BaseChatClient",
    "ChatClient",
    "DEFAULT_API_URL",
    "estimate_tokens",
    "ChatClientError",
    "RequestError",
    "UnknownError",
    "ChatPayload",
    "GenerationDefaults",
    "Message",
    "StreamEvent",
]
