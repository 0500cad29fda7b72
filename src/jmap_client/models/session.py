"""
Session resource models, as served by the session discovery URL.
"""

from typing import Any, Optional

from pydantic import ConfigDict

from jmap_client.models.envelope import WireModel


class Capability(WireModel):
    # Capability objects are extensible; unknown keys are kept.
    model_config = ConfigDict(extra="allow", frozen=True)

    max_size_upload: Optional[int] = None
    max_concurrent_upload: Optional[int] = None
    max_size_request: Optional[int] = None
    max_concurrent_requests: Optional[int] = None
    max_calls_in_request: Optional[int] = None
    max_objects_in_get: Optional[int] = None
    max_objects_in_set: Optional[int] = None
    collation_algorithms: Optional[list[str]] = None


class Account(WireModel):
    model_config = ConfigDict(frozen=True)

    name: str
    is_personal: bool
    is_read_only: bool
    account_capabilities: dict[str, dict[str, Any]]


class Session(WireModel):
    model_config = ConfigDict(frozen=True)

    capabilities: dict[str, Capability]
    accounts: dict[str, Account]
    primary_accounts: dict[str, str]
    username: str
    api_url: str
    download_url: str
    upload_url: str
    event_source_url: str
    state: str

    def primary_account_id(self, capability: str = "urn:ietf:params:jmap:mail") -> Optional[str]:
        return self.primary_accounts.get(capability)


class SessionState(WireModel):
    """Cache entry: a Session and when it was fetched (monotonic seconds)."""
    model_config = ConfigDict(frozen=True)

    session: Session
    last_updated: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.last_updated < ttl
