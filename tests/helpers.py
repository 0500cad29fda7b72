"""Test helpers: a scriptable fake JMAP server behind httpx.MockTransport."""

import json
from typing import Any, Callable, Union

import httpx

from jmap_client import AsyncJMAPClient

SESSION_URL = "https://jmap.example.com/.well-known/jmap"
API_URL = "https://jmap.example.com/api/"


def session_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "capabilities": {
            "urn:ietf:params:jmap:core": {"maxCallsInRequest": 16, "maxObjectsInGet": 500},
            "urn:ietf:params:jmap:mail": {},
        },
        "accounts": {
            "u1": {
                "name": "user@example.com",
                "isPersonal": True,
                "isReadOnly": False,
                "accountCapabilities": {"urn:ietf:params:jmap:mail": {}},
            },
        },
        "primaryAccounts": {"urn:ietf:params:jmap:mail": "u1"},
        "username": "user@example.com",
        "apiUrl": API_URL,
        "downloadUrl": "https://jmap.example.com/download/{accountId}/{blobId}/{name}?type={type}",
        "uploadUrl": "https://jmap.example.com/upload/{accountId}/",
        "eventSourceUrl": "https://jmap.example.com/events/?types={types}&closeafter={closeafter}&ping={ping}",
        "state": "session-1",
    }
    data.update(overrides)
    return data


Reply = Union[httpx.Response, Callable[[dict[str, Any]], httpx.Response], BaseException]


class FakeJMAPServer:
    """Serves the session document and answers API POSTs.

    API calls are answered from ``api_replies`` in order; once that is empty
    each call is echoed back with ``sessionState`` set to ``"state-<n>"``
    where n counts API exchanges.
    """

    def __init__(self) -> None:
        self.session = session_payload()
        self.session_replies: list[Reply] = []
        self.api_replies: list[Reply] = []
        self.requests: list[httpx.Request] = []
        self.api_bodies: list[dict[str, Any]] = []
        self.session_fetches = 0

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and str(request.url) == SESSION_URL:
            self.session_fetches += 1
            if self.session_replies:
                return self._play(self.session_replies.pop(0), {})
            return httpx.Response(200, json=self.session)

        if request.method == "POST" and str(request.url) == API_URL:
            body = json.loads(request.content)
            self.api_bodies.append(body)
            if self.api_replies:
                return self._play(self.api_replies.pop(0), body)
            return httpx.Response(200, json=self.echo(body))

        return httpx.Response(404, text="not found")

    def _play(self, reply: Reply, body: dict[str, Any]) -> httpx.Response:
        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return reply(body)

    def echo(self, body: dict[str, Any]) -> dict[str, Any]:
        return {
            "methodResponses": [[name, {"echo": args}, call_id] for name, args, call_id in body["methodCalls"]],
            "sessionState": f"state-{len(self.api_bodies)}",
        }


def make_client(server: FakeJMAPServer, **overrides: Any) -> AsyncJMAPClient:
    overrides.setdefault("retry_delay", 0)
    return AsyncJMAPClient(
        session_url=SESSION_URL,
        bearer_token="secret-token",
        transport=server.transport,
        **overrides,
    )


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
