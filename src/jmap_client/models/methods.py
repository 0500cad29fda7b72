"""
Standard result shapes shared by the /get, /set and /query methods.

Service code passes these to ``extract`` as the expected shape, e.g.
``extract(resp, "Mailbox/get", "m0", GetResponse[Mailbox])``.
"""

from typing import Any, Generic, Optional, TypeVar

from jmap_client.models.envelope import WireModel

T = TypeVar("T")


class ResultReference(WireModel):
    result_of: str
    name: str
    path: str


class GetResponse(WireModel, Generic[T]):
    account_id: str
    state: str
    list: list[T]
    not_found: list[str]


class SetResponse(WireModel, Generic[T]):
    account_id: str
    old_state: Optional[str] = None
    new_state: str
    created: Optional[dict[str, T]] = None
    updated: Optional[dict[str, Optional[dict[str, Any]]]] = None
    destroyed: Optional[list[str]] = None
    not_created: Optional[dict[str, Any]] = None
    not_updated: Optional[dict[str, Any]] = None
    not_destroyed: Optional[dict[str, Any]] = None


class QueryResponse(WireModel):
    account_id: str
    query_state: str
    can_calculate_changes: bool
    position: int
    ids: list[str]
    total: Optional[int] = None
    limit: Optional[int] = None
