"""Types for the chat client."""

from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A message in a chat conversation."""
    role: Role
    content: str


@dataclass(frozen=True)
class ChatPayload:
    """Everything needed for one chat completion call."""
    system_prompt: str
    messages: Sequence[Message] = field(default_factory=tuple)
    model: Optional[str] = None  # Falls back to GenerationDefaults.model
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass(frozen=True)
class GenerationDefaults:
    """Values used when a payload leaves an option unset."""
    model: str = "deepseek-v3.2"
    temperature: float = 0.8
    max_tokens: int = 1024


@dataclass(frozen=True)
class StreamEvent:
    """A single event produced while reading a streamed response."""
    kind: Literal["chunk", "done", "error"]
    text: str = ""
    error: Optional[Exception] = None

    @classmethod
    def chunk(cls, text: str) -> "StreamEvent":
        return cls(kind="chunk", text=text)

    @classmethod
    def done(cls) -> "StreamEvent":
        return cls(kind="done")

    @classmethod
    def failed(cls, error: Exception) -> "StreamEvent":
        return cls(kind="error", error=error)
