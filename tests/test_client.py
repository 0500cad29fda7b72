"""Tests for the client facades."""

import logging

import pytest

from helpers import API_URL, SESSION_URL, make_client
from jmap_client import AsyncJMAPClient, JMAPClient, create_client


def test_sync_client(server):
    with JMAPClient(session_url=SESSION_URL, bearer_token="tok", transport=server.transport, retry_delay=0) as client:
        session = client.get_session()
        assert session.api_url == API_URL
        assert client.get_session_state() == "session-1"

        response = client.batch([["Core/echo", {"a": 1}, "c1"]])
        assert client.extract(response, "Core/echo", "c1", dict) == {"echo": {"a": 1}}

        client.invalidate_session()
        client.get_session()
    assert server.session_fetches == 2


def test_create_client_uses_defaults():
    client = create_client("https://jmap.example.com/session", "tok")
    assert isinstance(client, AsyncJMAPClient)
    assert client.config.max_batch_size == 50
    assert client.config.user_agent == "effect-jmap/0.1.0"


@pytest.mark.asyncio
async def test_async_context_manager(server):
    async with make_client(server) as client:
        assert await client.get_session_state() == "session-1"


@pytest.mark.asyncio
async def test_request_logging_toggle(server, caplog):
    caplog.set_level(logging.INFO, logger="jmap_client")
    async with make_client(server) as client:
        await client.batch([["Core/echo", {}, "1"]])
    assert not [r for r in caplog.records if "Sending JMAP request" in r.getMessage()]

    caplog.clear()
    async with make_client(server, enable_request_logging=True) as client:
        await client.batch([["Core/echo", {}, "1"]])
    messages = [r.getMessage() for r in caplog.records]
    assert any("Fetching JMAP session" in m for m in messages)
    assert any("Sending JMAP request" in m for m in messages)
    sent = len(server.requests[-1].content)
    assert any(m.endswith(f"1 method calls, {sent} bytes") for m in messages)
    assert any("Received JMAP response" in m for m in messages)
