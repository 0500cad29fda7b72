"""
Request and response envelopes for the JMAP API endpoint.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# [method name, arguments, call id]
Invocation = tuple[str, dict[str, Any], str]

DEFAULT_USING = ["urn:ietf:params:jmap:core", "urn:ietf:params:jmap:mail"]

MethodErrorType = Literal[
    "accountNotFound",
    "accountNotSupportedByMethod",
    "accountReadOnly",
    "anchorNotFound",
    "cannotCalculateChanges",
    "forbidden",
    "fromAccountNotFound",
    "fromAccountNotSupportedByMethod",
    "invalidArguments",
    "invalidPatch",
    "invalidProperties",
    "notFound",
    "notJSON",
    "notRequest",
    "overQuota",
    "rateLimit",
    "requestTooLarge",
    "serverFail",
    "serverPartialFail",
    "serverUnavailable",
    "singleton",
    "tooLarge",
    "tooManyChanges",
    "unknownCapability",
    "unknownMethod",
    "unsupportedFilter",
    "unsupportedSort",
    "willDestroy",
]


class WireModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        # Only unset envelope keys are dropped; nulls inside arguments are kept.
        return {k: v for k, v in self.model_dump(by_alias=True).items() if v is not None}


class Request(WireModel):
    using: list[str] = Field(default_factory=lambda: list(DEFAULT_USING))
    method_calls: list[Invocation]
    created_ids: Optional[dict[str, str]] = None


class Response(WireModel):
    method_responses: list[Invocation]
    created_ids: Optional[dict[str, str]] = None
    session_state: str


class MethodErrorPayload(BaseModel):
    """Arguments of an ``"error"`` response invocation."""
    type: MethodErrorType
    description: Optional[str] = None
    details: Optional[Any] = None
