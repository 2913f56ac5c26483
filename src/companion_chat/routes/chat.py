"""Chat relay endpoints.

The browser talks to these routes; the API key stays on the server.
"""

import json
import logging
from contextlib import aclosing
from typing import Literal, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from ..llm import BaseChatClient, ChatPayload, Message, RequestError, estimate_tokens

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def get_chat_client() -> BaseChatClient:
    """Get the chat client from app state. Set at app startup."""
    return _chat_client


_chat_client: BaseChatClient = None  # type: ignore


def set_chat_client(client: BaseChatClient):
    global _chat_client
    _chat_client = client


class MessageIn(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    system_prompt: str
    messages: list[MessageIn] = Field(default_factory=list)
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def to_payload(self) -> ChatPayload:
        return ChatPayload(
            system_prompt=self.system_prompt,
            messages=tuple(Message(role=m.role, content=m.content) for m in self.messages),
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


class TokenEstimateRequest(BaseModel):
    text: str


def _sse(data: str) -> str:
    return f"data: {data}\n\n"


@router.post("/chat")
async def chat(request: ChatRequest):
    """Relay one complete chat turn."""
    client = get_chat_client()
    try:
        content = await client.send_chat(request.to_payload())
    except RequestError as e:
        return JSONResponse(status_code=e.status_code or 502, content={"error": e.message})
    except Exception as e:
        logger.exception("Chat relay failed")
        return JSONResponse(status_code=502, content={"error": str(e) or "Unknown error"})
    return {"content": content}


@router.post("/chat/stream")
async def chat_stream(request: ChatRequest):
    """Relay a chat turn as server-sent events, ending with ``data: [DONE]``."""
    client = get_chat_client()
    payload = request.to_payload()

    async def event_stream():
        async with aclosing(client.stream_events(payload)) as events:
            async for event in events:
                if event.kind == "chunk":
                    yield _sse(json.dumps({"content": event.text}, ensure_ascii=False))
                elif event.kind == "error":
                    yield _sse(json.dumps({"error": str(event.error) or "Unknown error"}, ensure_ascii=False))
        yield _sse("[DONE]")

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@router.post("/tokens/estimate")
async def tokens_estimate(request: TokenEstimateRequest):
    """Rough token count for a draft message."""
    return {"tokens": estimate_tokens(request.text)}
