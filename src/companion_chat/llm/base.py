"""Abstract base class for chat clients."""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Awaitable, Callable, Union

from .types import ChatPayload, StreamEvent

ChunkCallback = Callable[[str], Union[None, Awaitable[None]]]
DoneCallback = Callable[[], Union[None, Awaitable[None]]]
ErrorCallback = Callable[[Exception], Union[None, Awaitable[None]]]


class BaseChatClient(ABC):
    """Abstract interface for chat completion backends."""

    @abstractmethod
    async def send_chat(self, payload: ChatPayload) -> str:
        """Request a complete answer.

        Args:
            payload: System prompt, conversation and generation options.

        Returns:
            The assistant's reply, or an empty string if the response had none.
        """
        ...

    @abstractmethod
    async def stream_chat(
        self,
        payload: ChatPayload,
        on_chunk: ChunkCallback,
        on_done: DoneCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Forward reply fragments to *on_chunk* as they are read.

        Exactly one of *on_done* or *on_error* fires at the end; upstream
        failures are reported through *on_error*, never raised.
        """
        ...

    @abstractmethod
    def stream_events(self, payload: ChatPayload) -> AsyncIterator[StreamEvent]:
        """Yield chunk events followed by one terminal done or error event."""
        ...
