"""
Session cache: the lazily fetched JMAP Session and its invalidation policy.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from jmap_client.config import ClientConfig
from jmap_client.errors import AuthenticationError, SessionError
from jmap_client.models.session import Session, SessionState
from jmap_client.transport.http import HttpClient

logger = logging.getLogger(__name__)


class SessionCache:
    """Owns the cached Session. The only writer of the cache entry.

    A cached Session is reused while it is younger than ``session_ttl``;
    afterwards the next ``get_session()`` fetches a new one. Concurrent
    callers share a single in-flight fetch.
    """

    def __init__(
        self,
        http: HttpClient,
        config: ClientConfig,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._http = http
        self._session_url = config.session_url
        self._ttl = config.session_ttl
        self._log_requests = config.enable_request_logging
        self._clock = clock
        self._state: Optional[SessionState] = None
        # Bumped by invalidate(); a fetch started under an older generation is discarded.
        self._generation = 0
        self._lock = asyncio.Lock()

    @property
    def cached(self) -> Optional[Session]:
        """The cached Session regardless of age, or None."""
        state = self._state
        return state.session if state else None

    def _fresh(self) -> Optional[Session]:
        state = self._state
        if state is not None and state.is_fresh(self._clock(), self._ttl):
            return state.session
        return None

    async def get_session(self) -> Session:
        session = self._fresh()
        if session is not None:
            return session
        async with self._lock:
            # Another caller may have refreshed while we waited.
            session = self._fresh()
            if session is not None:
                return session
            return await self._fetch()

    async def get_session_state(self) -> str:
        return (await self.get_session()).state

    async def refresh(self) -> Session:
        """Fetch a new Session unconditionally."""
        async with self._lock:
            return await self._fetch()

    def invalidate(self) -> None:
        if self._state is not None:
            logger.info("Invalidating cached JMAP session")
        self._state = None
        self._generation += 1

    async def _fetch(self) -> Session:
        if self._log_requests:
            logger.info("Fetching JMAP session from %s", self._session_url)
        generation = self._generation
        try:
            raw = await self._http.get(self._session_url)
        except AuthenticationError:
            self._state = None
            raise
        try:
            session = Session.model_validate(raw)
        except ValidationError as e:
            raise SessionError("Invalid session response format", details=e.errors()) from e
        if generation == self._generation:
            self._state = SessionState(session=session, last_updated=self._clock())
        if self._log_requests:
            logger.info("JMAP session fetched: apiUrl=%s state=%s", session.api_url, session.state)
        return session
