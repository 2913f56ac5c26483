"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import json
from typing import AsyncIterator, Callable

import httpx
import pytest

from companion_chat.llm import BaseChatClient, ChatClient, ChatPayload, Message, StreamEvent

# --- Protocol-conforming Fakes ---


class FakeChatClient(BaseChatClient):
    """Fake chat client for relay route tests."""

    def __init__(self, response: str = 'Fake reply', fragments: list[str] | None = None):
        self._response = response
        self._fragments = list(fragments or [])
        self._error: Exception | None = None
        self.send_calls: list[ChatPayload] = []
        self.stream_calls: list[ChatPayload] = []
        self.stream_closed = False

    async def send_chat(self, payload: ChatPayload) -> str:
        self.send_calls.append(payload)
        if self._error is not None:
            raise self._error
        return self._response

    async def stream_chat(self, payload, on_chunk, on_done, on_error) -> None:
        async for event in self.stream_events(payload):
            if event.kind == 'chunk':
                on_chunk(event.text)
            elif event.kind == 'done':
                on_done()
            else:
                on_error(event.error)

    async def stream_events(self, payload: ChatPayload) -> AsyncIterator[StreamEvent]:
        self.stream_calls.append(payload)
        try:
            for fragment in self._fragments:
                yield StreamEvent.chunk(fragment)
            if self._error is not None:
                yield StreamEvent.failed(self._error)
            else:
                yield StreamEvent.done()
        finally:
            self.stream_closed = True

    def set_error(self, error: Exception | None) -> None:
        self._error = error


class Recorder:
    """Collects stream_chat callbacks in call order."""

    def __init__(self):
        self.calls: list[tuple] = []

    def on_chunk(self, text: str) -> None:
        self.calls.append(('chunk', text))

    def on_done(self) -> None:
        self.calls.append(('done',))

    def on_error(self, err: Exception) -> None:
        self.calls.append(('error', err))

    @property
    def chunks(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == 'chunk']

    @property
    def errors(self) -> list[Exception]:
        return [c[1] for c in self.calls if c[0] == 'error']

    @property
    def done_count(self) -> int:
        return sum(1 for c in self.calls if c[0] == 'done')


def sse_line(content: str) -> str:
    return 'data: ' + json.dumps({'choices': [{'delta': {'content': content}}]}, ensure_ascii=False) + '\n'


async def byte_chunks(*chunks: bytes) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


def make_client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> ChatClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatClient(api_key='sk-test', api_url='https://chat.test/v1/chat/completions', http_client=http_client, **kwargs)


# --- Standard Fixtures ---


@pytest.fixture
def payload() -> ChatPayload:
    return ChatPayload(
        system_prompt='You are Aichixia.',
        messages=(
            Message(role='user', content='Halo!'),
            Message(role='assistant', content='Hai, apa kabar?'),
            Message(role='user', content='Baik.'),
        ),
    )


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def fake_chat_client() -> FakeChatClient:
    return FakeChatClient()
