"""Tests for the chat relay endpoints: the upstream client is a fake."""

from __future__ import annotations

import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from companion_chat.llm import RequestError, UnknownError
from companion_chat.routes import chat
from tests.conftest import FakeChatClient

REQUEST = {
    'system_prompt': 'You are Aichixia.',
    'messages': [{'role': 'user', 'content': 'Halo!'}],
}


@pytest.fixture
def client(fake_chat_client: FakeChatClient) -> TestClient:
    app = FastAPI()
    app.include_router(chat.router)
    chat.set_chat_client(fake_chat_client)
    return TestClient(app)


def _data_lines(response) -> list[str]:
    return [line[len('data: '):] for line in response.iter_lines() if line.startswith('data: ')]


class TestChatEndpoint:
    def test_returns_reply(self, client, fake_chat_client):
        fake_chat_client._response = 'Hai!'

        r = client.post('/api/chat', json={**REQUEST, 'temperature': 0.2})

        assert r.status_code == 200
        assert r.json() == {'content': 'Hai!'}
        payload = fake_chat_client.send_calls[0]
        assert payload.system_prompt == 'You are Aichixia.'
        assert payload.messages[0].role == 'user'
        assert payload.temperature == 0.2
        assert payload.model is None

    def test_upstream_request_error_keeps_status(self, client, fake_chat_client):
        fake_chat_client.set_error(RequestError('bad key', status_code=401))

        r = client.post('/api/chat', json=REQUEST)

        assert r.status_code == 401
        assert r.json() == {'error': 'bad key'}

    def test_request_error_without_status_is_bad_gateway(self, client, fake_chat_client):
        fake_chat_client.set_error(RequestError('upstream said no'))

        r = client.post('/api/chat', json=REQUEST)

        assert r.status_code == 502
        assert r.json() == {'error': 'upstream said no'}

    def test_other_errors_are_bad_gateway(self, client, fake_chat_client):
        fake_chat_client.set_error(UnknownError('connection refused'))

        r = client.post('/api/chat', json=REQUEST)

        assert r.status_code == 502
        assert r.json() == {'error': 'connection refused'}

    def test_unknown_role_rejected(self, client):
        r = client.post('/api/chat', json={'system_prompt': 's', 'messages': [{'role': 'tool', 'content': 'x'}]})
        assert r.status_code == 422


class TestChatStreamEndpoint:
    def test_relays_fragments_then_done(self, client, fake_chat_client):
        fake_chat_client._fragments = ['Ha', 'lo']

        with client.stream('POST', '/api/chat/stream', json=REQUEST) as r:
            assert r.status_code == 200
            assert r.headers['content-type'].startswith('text/event-stream')
            lines = _data_lines(r)

        assert [json.loads(x) for x in lines[:-1]] == [{'content': 'Ha'}, {'content': 'lo'}]
        assert lines[-1] == '[DONE]'

    def test_error_event_before_done(self, client, fake_chat_client):
        fake_chat_client._fragments = ['partial']
        fake_chat_client.set_error(RequestError('bad key', status_code=401))

        with client.stream('POST', '/api/chat/stream', json=REQUEST) as r:
            lines = _data_lines(r)

        assert json.loads(lines[0]) == {'content': 'partial'}
        assert json.loads(lines[1]) == {'error': 'bad key'}
        assert lines[2] == '[DONE]'


    @pytest.mark.asyncio
    async def test_client_disconnect_closes_upstream_stream(self, fake_chat_client):
        fake_chat_client._fragments = ['one', 'two', 'three']
        chat.set_chat_client(fake_chat_client)

        response = await chat.chat_stream(chat.ChatRequest(**REQUEST))
        body = response.body_iterator
        first = await body.__anext__()
        await body.aclose()

        assert json.loads(first[len('data: '):]) == {'content': 'one'}
        assert fake_chat_client.stream_closed is True


def test_token_estimate(client):
    r = client.post('/api/tokens/estimate', json={'text': 'abcdefgh1'})
    assert r.json() == {'tokens': 3}
