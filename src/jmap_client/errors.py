"""
JMAP client error types.

Every error raised by the client is a JMAPError. Callers can catch the base
class or one of the five kinds below.
"""

from typing import Any, Optional, get_args

from pydantic import ValidationError

from jmap_client.models.envelope import MethodErrorPayload, MethodErrorType

METHOD_ERROR_TYPES = frozenset(get_args(MethodErrorType))


class JMAPError(Exception):
    def __init__(self, code: str, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class NetworkError(JMAPError):
    """Transport failure, unexpected HTTP status, or an unreadable response body."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__("network_error", message)
        self.status = status
        self.cause = cause


class AuthenticationError(JMAPError):
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__("authentication_error", message, details)


class SessionError(JMAPError):
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__("session_error", message, details)


class ConfigurationError(JMAPError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__("configuration_error", message)
        self.field = field


class MethodError(JMAPError):
    """A per-call failure reported by the server (or synthesized during extraction).

    ``call_id`` identifies which invocation of the batch failed.
    """

    def __init__(
        self,
        type: str,
        description: Optional[str] = None,
        details: Optional[Any] = None,
        call_id: Optional[str] = None,
    ):
        super().__init__("method_error", description or f"JMAP Method Error: {type}", details)
        self.type = type
        self.description = description
        self.call_id = call_id

    @classmethod
    def from_payload(cls, payload: Any, call_id: Optional[str] = None) -> "MethodError":
        """Build from the arguments of an ``"error"`` response invocation."""
        try:
            parsed = MethodErrorPayload.model_validate(payload)
        except ValidationError:
            return cls(
                "serverFail",
                description=f"Malformed method error payload: {payload!r}",
                details=payload,
                call_id=call_id,
            )
        return cls(parsed.type, parsed.description, parsed.details, call_id)

    def __repr__(self) -> str:
        return f"MethodError(type={self.type!r}, call_id={self.call_id!r})"
