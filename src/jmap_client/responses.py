"""
Correlating a batched Response back to one method call's result.
"""

from typing import Any, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from jmap_client.errors import MethodError
from jmap_client.models.envelope import Response

T = TypeVar("T")


def find_invocation(response: Response, method_name: str, call_id: str) -> Optional[dict[str, Any]]:
    """Arguments of the first response invocation matching both name and call id."""
    for name, result, cid in response.method_responses:
        if name == method_name and cid == call_id:
            return result
    return None


def extract(response: Response, method_name: str, call_id: str, shape: Union[type[T], Any]) -> T:
    """Return the ``method_name``/``call_id`` result decoded as ``shape``.

    ``shape`` is a pydantic model or any type ``pydantic.TypeAdapter`` accepts.
    Duplicated pairs resolve to the first occurrence.

    Raises:
        MethodError: ``notFound`` if the pair is absent, ``serverFail`` if the
            result does not validate against ``shape``.
    """
    result = find_invocation(response, method_name, call_id)
    if result is None:
        raise MethodError(
            "notFound",
            description=f"Method response not found for {method_name}",
            call_id=call_id,
        )
    try:
        return TypeAdapter(shape).validate_python(result)
    except ValidationError as e:
        raise MethodError(
            "serverFail",
            description=f"Invalid response format for {method_name}: {e}",
            details=e.errors(),
            call_id=call_id,
        ) from e
