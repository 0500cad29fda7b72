"""
Request dispatcher: turns method calls into HTTP exchanges against the API URL.

Batches larger than ``max_batch_size`` are split into ordered chunks that run
one after another; their responses are stitched back into one Response.
"""

import json
import logging
from typing import Any, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from jmap_client.config import ClientConfig
from jmap_client.errors import AuthenticationError, NetworkError
from jmap_client.models.envelope import Invocation, Request, Response
from jmap_client.sessions import SessionCache
from jmap_client.transport.envelope import build_request, chunk_calls, parse_response, raise_for_method_errors
from jmap_client.transport.http import HttpClient

logger = logging.getLogger(__name__)


class RequestDispatcher:
    def __init__(self, http: HttpClient, sessions: SessionCache, config: ClientConfig):
        self._http = http
        self._sessions = sessions
        self._max_batch_size = config.max_batch_size
        self._log_requests = config.enable_request_logging

    async def batch(
        self,
        method_calls: Sequence[Invocation],
        using: Optional[Sequence[str]] = None,
    ) -> Response:
        """Send method calls, chunking if needed, and return one combined Response.

        Raises MethodError if any invocation came back as ``"error"``. When a
        chunk fails, later chunks are not sent and earlier results are dropped.
        """
        if len(method_calls) <= self._max_batch_size:
            return await self._execute(build_request(method_calls, using))

        chunks = chunk_calls(method_calls, self._max_batch_size)
        if self._log_requests:
            logger.info("Splitting %d method calls into %d chunks", len(method_calls), len(chunks))

        responses: list[Invocation] = []
        created_ids: dict[str, str] = {}
        session_state = ""
        for chunk in chunks:
            chunk_response = await self._execute(build_request(chunk, using))
            responses.extend(chunk_response.method_responses)
            if chunk_response.created_ids:
                created_ids.update(chunk_response.created_ids)
            session_state = chunk_response.session_state

        return Response(
            method_responses=responses,
            created_ids=created_ids or None,
            session_state=session_state,
        )

    async def request(self, req: Request, shape: Any) -> Any:
        """Send one raw Request and decode the whole reply envelope as ``shape``."""
        response = await self._execute(req)
        try:
            return TypeAdapter(shape).validate_python(response.to_wire())
        except ValidationError as e:
            raise NetworkError("Response does not match expected schema", cause=e) from e

    async def _execute(self, req: Request) -> Response:
        session = await self._sessions.get_session()
        content = json.dumps(req.to_wire())
        if self._log_requests:
            logger.info(
                "Sending JMAP request to %s: %d method calls, %d bytes",
                session.api_url, len(req.method_calls), len(content.encode()),
            )

        try:
            raw = await self._http.post(session.api_url, content)
        except AuthenticationError:
            # The session came from credentials the server no longer accepts.
            self._sessions.invalidate()
            raise

        response = parse_response(raw)
        if self._log_requests:
            logger.info(
                "Received JMAP response: %d method responses, sessionState=%s",
                len(response.method_responses), response.session_state,
            )
        raise_for_method_errors(response)
        return response
