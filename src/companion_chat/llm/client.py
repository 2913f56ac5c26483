"""Client for the hosted OpenAI-compatible chat completion API.

The upstream endpoint is always called with ``stream: false``. The
streaming entry points still read the body incrementally and understand
``data: {...}`` lines terminated by ``data: [DONE]``, so an upstream that
does frame its answer that way is relayed fragment by fragment.
"""

import codecs
import inspect
import json
import logging
from contextlib import aclosing
from typing import Any, AsyncIterator

import httpx

from .base import BaseChatClient, ChunkCallback, DoneCallback, ErrorCallback
from .errors import GENERIC_REQUEST_ERROR, RequestError, UnknownError
from .types import ChatPayload, GenerationDefaults, StreamEvent

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://www.aichixia.xyz/api/v1/chat/completions"

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

# Returned by parse_stream_line for the sentinel line.
END_OF_STREAM = object()


def estimate_tokens(text: str) -> int:
    """Rough token count: one token per four characters, rounded up."""
    return (len(text) + 3) // 4


def _first_choice(data: Any) -> dict:
    if not isinstance(data, dict):
        return {}
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return {}
    return choices[0]


def extract_message_content(data: Any) -> str:
    """Return ``choices[0].message.content`` or an empty string."""
    message = _first_choice(data).get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]
    return ""


def extract_delta_content(data: Any) -> str:
    """Return ``choices[0].delta.content`` or an empty string."""
    delta = _first_choice(data).get("delta")
    if isinstance(delta, dict) and isinstance(delta.get("content"), str):
        return delta["content"]
    return ""


def parse_stream_line(line: str):
    """Classify one line of the event stream.

    Returns ``END_OF_STREAM`` for the sentinel, the delta text for a content
    event, and an empty string for anything that should be skipped
    (non-data lines, events without content, malformed JSON).
    """
    if not line.startswith(DATA_PREFIX):
        return ""
    data = line[len(DATA_PREFIX):].strip()
    if data == DONE_SENTINEL:
        return END_OF_STREAM
    try:
        event = json.loads(data)
    except ValueError:
        logger.debug("Skipping malformed stream line: %r", data[:200])
        return ""
    return extract_delta_content(event)


async def _iter_lines(response: httpx.Response) -> AsyncIterator[str]:
    """Yield complete lines, holding a partial trailing line until more bytes arrive."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    pending = ""
    async for raw in response.aiter_bytes():
        pending += decoder.decode(raw)
        *lines, pending = pending.split("\n")
        for line in lines:
            yield line
    pending += decoder.decode(b"", final=True)
    if pending:
        yield pending


async def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return

    await response.aread()
    message = GENERIC_REQUEST_ERROR
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        detail = body["error"].get("message")
        if detail is not None:
            message = str(detail)

    logger.warning("Chat API returned %s: %s", response.status_code, message)
    raise RequestError(message, status_code=response.status_code)


async def _invoke(callback, *args) -> None:
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class ChatClient(BaseChatClient):
    """Chat client that talks to an OpenAI-compatible completions endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        defaults: GenerationDefaults | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.defaults = defaults or GenerationDefaults()
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=None, follow_redirects=True)
            self._owns_client = True
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    @staticmethod
    def build_messages(payload: ChatPayload) -> list[dict[str, str]]:
        """Prepend the system prompt to the conversation in provider format."""
        return [
            {"role": "system", "content": payload.system_prompt},
            *({"role": m.role, "content": m.content} for m in payload.messages),
        ]

    def build_request_body(self, payload: ChatPayload) -> dict[str, Any]:
        return {
            "model": payload.model if payload.model is not None else self.defaults.model,
            "messages": self.build_messages(payload),
            "temperature": (
                payload.temperature if payload.temperature is not None else self.defaults.temperature
            ),
            "max_tokens": payload.max_tokens if payload.max_tokens is not None else self.defaults.max_tokens,
            "stream": False,
        }

    async def send_chat(self, payload: ChatPayload) -> str:
        body = self.build_request_body(payload)
        logger.info("Chat request: model=%s messages=%d", body["model"], len(body["messages"]))

        client = await self._get_client()
        try:
            response = await client.post(self.api_url, headers=self._headers(), json=body)
        except httpx.HTTPError as exc:
            logger.warning("Chat request failed: %s", exc)
            raise UnknownError.wrap(exc) from exc

        await _raise_for_status(response)
        try:
            data = response.json()
        except ValueError as exc:
            raise UnknownError("Chat API returned a body that is not JSON") from exc
        return extract_message_content(data)

    async def iter_chunks(self, payload: ChatPayload) -> AsyncIterator[str]:
        """Yield reply fragments until the sentinel or the end of the body.

        Raises on transport failures and non-success statuses.
        """
        body = self.build_request_body(payload)
        logger.info("Streaming chat request: model=%s messages=%d", body["model"], len(body["messages"]))

        client = await self._get_client()
        async with client.stream("POST", self.api_url, headers=self._headers(), json=body) as response:
            await _raise_for_status(response)
            async with aclosing(_iter_lines(response)) as lines:
                async for line in lines:
                    fragment = parse_stream_line(line)
                    if fragment is END_OF_STREAM:
                        return
                    if fragment:
                        yield fragment

    async def stream_chat(
        self,
        payload: ChatPayload,
        on_chunk: ChunkCallback,
        on_done: DoneCallback,
        on_error: ErrorCallback,
    ) -> None:
        try:
            async with aclosing(self.iter_chunks(payload)) as chunks:
                async for text in chunks:
                    await _invoke(on_chunk, text)
            await _invoke(on_done)
        except Exception as exc:
            logger.warning("Streaming chat failed: %s", exc)
            try:
                await _invoke(on_error, UnknownError.wrap(exc))
            except Exception:
                logger.exception("on_error callback failed")

    async def stream_events(self, payload: ChatPayload) -> AsyncIterator[StreamEvent]:
        try:
            async with aclosing(self.iter_chunks(payload)) as chunks:
                async for text in chunks:
                    yield StreamEvent.chunk(text)
        except Exception as exc:
            logger.warning("Streaming chat failed: %s", exc)
            yield StreamEvent.failed(UnknownError.wrap(exc))
            return
        yield StreamEvent.done()

    async def close(self):
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "ChatClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
