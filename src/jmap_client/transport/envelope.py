"""
Envelope construction, parsing and the method-error scan.
"""

from typing import Any, Optional, Sequence

from pydantic import ValidationError

from jmap_client.errors import MethodError, NetworkError
from jmap_client.models.envelope import DEFAULT_USING, Invocation, Request, Response


def build_request(
    method_calls: Sequence[Invocation],
    using: Optional[Sequence[str]] = None,
    created_ids: Optional[dict[str, str]] = None,
) -> Request:
    """Validate method calls into a Request. Raises MethodError on a malformed invocation."""
    try:
        return Request(
            using=list(using) if using is not None else list(DEFAULT_USING),
            method_calls=list(method_calls),
            created_ids=created_ids,
        )
    except ValidationError as e:
        raise MethodError(
            "invalidArguments",
            description=f"Malformed method call: {e.errors()[0]['msg']}",
            details=e.errors(),
        ) from e


def parse_response(raw: Any) -> Response:
    """Validate a decoded API reply. Raises NetworkError if it is not a Response."""
    try:
        return Response.model_validate(raw)
    except ValidationError as e:
        raise NetworkError("Invalid JMAP response format", cause=e) from e


def raise_for_method_errors(response: Response) -> None:
    """Raise MethodError for the first ``"error"`` invocation in the response."""
    for name, result, call_id in response.method_responses:
        if name == "error":
            raise MethodError.from_payload(result, call_id)


def chunk_calls(method_calls: Sequence[Invocation], size: int) -> list[list[Invocation]]:
    """Split into contiguous chunks of at most ``size``, preserving order."""
    return [list(method_calls[i:i + size]) for i in range(0, len(method_calls), size)]
