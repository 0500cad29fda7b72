"""
HTTP transport for the session and API endpoints.

Transport failures (connect errors, timeouts, broken connections) are retried
with exponential backoff. A received response is never retried: 401 raises
AuthenticationError, any other non-200 status raises NetworkError.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from jmap_client.config import ClientConfig
from jmap_client.errors import AuthenticationError, NetworkError

logger = logging.getLogger(__name__)


def _calculate_backoff(attempt: int, base: float) -> float:
    """Delay before retry number ``attempt`` (0-indexed): base * 2^attempt."""
    return base * (2 ** attempt)


class HttpClient:
    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._token = config.bearer_token
        self._max_retries = config.max_retries
        self._retry_delay = config.retry_delay
        self._client = httpx.AsyncClient(
            headers={"User-Agent": config.user_agent, "Accept": "application/json"},
            timeout=config.timeout,
            transport=transport,
            follow_redirects=True,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
        }

    async def _send(
        self,
        method: str,
        url: str,
        content: Optional[str],
        failure: str,
        unauthorized: str,
    ) -> Any:
        attempts = self._max_retries + 1
        for attempt in range(attempts):
            try:
                resp = await self._client.request(method, url, content=content, headers=self._headers())
                break
            except httpx.TransportError as e:
                if attempt >= attempts - 1:
                    raise NetworkError(failure, cause=e) from e
                delay = _calculate_backoff(attempt, self._retry_delay)
                logger.warning(
                    "%s %s failed (%s), retrying in %.2fs (%d/%d)",
                    method, url, e.__class__.__name__, delay, attempt + 1, self._max_retries,
                )
                await asyncio.sleep(delay)

        if resp.status_code == 401:
            raise AuthenticationError(unauthorized)
        if resp.status_code != 200:
            raise NetworkError(f"HTTP {resp.status_code}", status=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise NetworkError("Invalid JSON response", status=resp.status_code, cause=e) from e

    async def get(self, url: str) -> Any:
        """Fetch a JSON document (session discovery)."""
        return await self._send(
            "GET", url, None,
            failure="Failed to connect to JMAP server",
            unauthorized="Invalid bearer token",
        )

    async def post(self, url: str, content: str) -> Any:
        """POST an encoded JSON body and return the decoded JSON reply."""
        return await self._send(
            "POST", url, content,
            failure="Failed to send JMAP request",
            unauthorized="Bearer token expired or invalid",
        )

    async def close(self) -> None:
        await self._client.aclose()
