"""
AsyncJMAPClient / JMAPClient — main client entry points.
"""

import asyncio
from typing import Any, Optional, Sequence

import httpx

from jmap_client.config import ClientConfig, default_config
from jmap_client.dispatch import RequestDispatcher
from jmap_client.errors import ConfigurationError
from jmap_client.models.envelope import Invocation, Request, Response
from jmap_client.models.session import Session
from jmap_client.responses import extract
from jmap_client.sessions import SessionCache
from jmap_client.transport.http import HttpClient


class AsyncJMAPClient:
    """Async JMAP client (primary).

    Either pass a ClientConfig, or ``session_url`` and ``bearer_token`` plus any
    other ClientConfig fields as keyword arguments.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session_url: Optional[str] = None,
        bearer_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **overrides: Any,
    ):
        if config is None:
            if not session_url:
                raise ConfigurationError("session_url is required", field="session_url")
            if not bearer_token:
                raise ConfigurationError("bearer_token is required", field="bearer_token")
            config = ClientConfig(session_url=session_url, bearer_token=bearer_token, **overrides)
        elif session_url or bearer_token or overrides:
            fields = config.model_dump()
            fields.update(overrides)
            if session_url:
                fields["session_url"] = session_url
            if bearer_token:
                fields["bearer_token"] = bearer_token
            config = ClientConfig(**fields)

        self.config = config
        self.http = HttpClient(config, transport=transport)
        self.sessions = SessionCache(self.http, config)
        self.dispatcher = RequestDispatcher(self.http, self.sessions, config)

    async def get_session(self) -> Session:
        return await self.sessions.get_session()

    async def get_session_state(self) -> str:
        return await self.sessions.get_session_state()

    def invalidate_session(self) -> None:
        self.sessions.invalidate()

    async def batch(self, method_calls: Sequence[Invocation], using: Optional[Sequence[str]] = None) -> Response:
        return await self.dispatcher.batch(method_calls, using)

    async def request(self, req: Request, shape: Any) -> Any:
        return await self.dispatcher.request(req, shape)

    extract = staticmethod(extract)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncJMAPClient":
        return self

    async def __aexit__(self, *_exc: Any) -> None:
        await self.close()


class JMAPClient:
    """Sync wrapper around AsyncJMAPClient. Runs the event loop internally."""

    def __init__(self, *args: Any, **kwargs: Any):
        self._async = AsyncJMAPClient(*args, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def config(self) -> ClientConfig:
        return self._async.config

    def get_session(self) -> Session:
        return self._run(self._async.get_session())

    def get_session_state(self) -> str:
        return self._run(self._async.get_session_state())

    def invalidate_session(self) -> None:
        self._async.invalidate_session()

    def batch(self, method_calls: Sequence[Invocation], using: Optional[Sequence[str]] = None) -> Response:
        return self._run(self._async.batch(method_calls, using))

    def request(self, req: Request, shape: Any) -> Any:
        return self._run(self._async.request(req, shape))

    extract = staticmethod(extract)

    def close(self) -> None:
        try:
            self._run(self._async.close())
        finally:
            self._loop.close()

    def __enter__(self) -> "JMAPClient":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()


def create_client(session_url: str, bearer_token: str, **kwargs: Any) -> AsyncJMAPClient:
    """Async client with the default configuration."""
    return AsyncJMAPClient(default_config(session_url, bearer_token), **kwargs)
