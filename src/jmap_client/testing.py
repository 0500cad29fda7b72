"""
In-memory stand-in for AsyncJMAPClient, for testing code built on top of it.

    fake = FakeJMAPClient(mock_responses=[(("Mailbox/get", {"accountId": "a"}), {...})])
    resp = await fake.batch([["Mailbox/get", {"accountId": "a"}, "0"]])
"""

import asyncio
import json
from typing import Any, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from jmap_client.errors import AuthenticationError, NetworkError
from jmap_client.models.envelope import Invocation, Request, Response
from jmap_client.models.session import Session
from jmap_client.responses import extract

TEST_ACCOUNT_ID = "test-account-id"


def default_test_session() -> Session:
    return Session.model_validate({
        "capabilities": {
            "urn:ietf:params:jmap:core": {
                "maxSizeUpload": 50000000,
                "maxConcurrentUpload": 4,
                "maxSizeRequest": 10000000,
                "maxConcurrentRequests": 4,
                "maxCallsInRequest": 16,
                "maxObjectsInGet": 500,
                "maxObjectsInSet": 500,
                "collationAlgorithms": ["i;ascii-numeric", "i;ascii-casemap"],
            },
            "urn:ietf:params:jmap:mail": {},
        },
        "accounts": {
            TEST_ACCOUNT_ID: {
                "name": "Test Account",
                "isPersonal": True,
                "isReadOnly": False,
                "accountCapabilities": {"urn:ietf:params:jmap:mail": {}},
            },
        },
        "primaryAccounts": {"urn:ietf:params:jmap:mail": TEST_ACCOUNT_ID},
        "username": "test@example.com",
        "apiUrl": "https://test.example.com/jmap/",
        "downloadUrl": "https://test.example.com/download/{accountId}/{blobId}/{name}?accept={type}",
        "uploadUrl": "https://test.example.com/upload/{accountId}/",
        "eventSourceUrl": "https://test.example.com/eventSource?types={types}&closeAfter={closeAfter}&ping={ping}",
        "state": "test-session-state-123",
    })


def _mock_key(method_name: str, args: Any) -> str:
    return f"{method_name}_{json.dumps(args, sort_keys=True)}"


class FakeJMAPClient:
    """Answers batches locally with canned payloads.

    ``mock_responses`` is a list of ``((method_name, arguments), payload)`` pairs;
    the payload is returned for that exact call. Calls without a mock get a
    default payload shaped for the method. ``batches`` records every batch received.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        mock_responses: Optional[Sequence[tuple[tuple[str, Any], Any]]] = None,
        simulate_errors: bool = False,
        network_delay: Optional[float] = None,
    ):
        self.session = session or default_test_session()
        self._mocks = {_mock_key(name, args): payload for (name, args), payload in (mock_responses or [])}
        self.simulate_errors = simulate_errors
        self.network_delay = network_delay
        self.batches: list[list[Invocation]] = []

    async def _delay(self) -> None:
        if self.network_delay:
            await asyncio.sleep(self.network_delay)

    async def get_session(self) -> Session:
        await self._delay()
        if self.simulate_errors:
            raise NetworkError("Simulated network error")
        return self.session

    async def get_session_state(self) -> str:
        await self._delay()
        return self.session.state

    def _respond(self, method_calls: Sequence[Invocation]) -> Response:
        responses = []
        for name, args, call_id in method_calls:
            key = _mock_key(name, args)
            if key in self._mocks:
                responses.append((name, self._mocks[key], call_id))
            else:
                responses.append((name, self._default_payload(name, args or {}), call_id))
        return Response(method_responses=responses, session_state=self.session.state)

    @staticmethod
    def _default_payload(method_name: str, args: dict[str, Any]) -> dict[str, Any]:
        account_id = args.get("accountId") or TEST_ACCOUNT_ID
        if method_name == "Mailbox/get":
            return {"accountId": account_id, "state": "mock-state-123", "list": [], "notFound": []}
        if method_name == "Email/get":
            return {"accountId": account_id, "state": "mock-state-456", "list": [], "notFound": []}
        if method_name == "Email/query":
            return {
                "accountId": account_id,
                "queryState": "mock-query-state-789",
                "canCalculateChanges": True,
                "position": 0,
                "ids": [],
                "total": 0,
            }
        return {"accountId": account_id}

    async def batch(self, method_calls: Sequence[Invocation], using: Optional[Sequence[str]] = None) -> Response:
        await self._delay()
        if self.simulate_errors:
            raise NetworkError("Simulated batch error")
        self.batches.append([tuple(call) for call in method_calls])
        return self._respond(method_calls)

    async def request(self, req: Request, shape: Any) -> Any:
        await self._delay()
        if self.simulate_errors:
            raise AuthenticationError("Simulated auth error")
        response = self._respond(req.method_calls)
        try:
            return TypeAdapter(shape).validate_python(response.to_wire())
        except ValidationError as e:
            raise NetworkError("Mock response validation failed", cause=e) from e

    extract = staticmethod(extract)

    async def close(self) -> None:
        pass
