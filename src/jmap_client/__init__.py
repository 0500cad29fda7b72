"""
jmap-client — typed async client for JMAP (RFC 8620 / RFC 8621).

Session discovery and caching, batched method calls with transparent
chunking, and typed extraction of method results.
"""

from jmap_client.client import AsyncJMAPClient, JMAPClient, create_client
from jmap_client.config import ClientConfig, default_config
from jmap_client.errors import (
    JMAPError,
    NetworkError,
    AuthenticationError,
    SessionError,
    MethodError,
    ConfigurationError,
)
from jmap_client.models.envelope import Invocation, Request, Response
from jmap_client.models.session import Session
from jmap_client.responses import extract

__version__ = "0.1.0"
__all__ = [
    "AsyncJMAPClient",
    "JMAPClient",
    "create_client",
    "ClientConfig",
    "default_config",
    "JMAPError",
    "NetworkError",
    "AuthenticationError",
    "SessionError",
    "MethodError",
    "ConfigurationError",
    "Invocation",
    "Request",
    "Response",
    "Session",
    "extract",
]
