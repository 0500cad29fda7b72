"""
Client configuration.

All settings are validated when the config is built; a bad value raises
ConfigurationError before any request is made.
"""

import os
from typing import Any, Callable, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from jmap_client.errors import ConfigurationError

DEFAULT_USER_AGENT = "effect-jmap/0.1.0"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_MAX_BATCH_SIZE = 50
DEFAULT_SESSION_TTL = 5 * 60.0

# env var -> config field
ENV_VARS = {
    "JMAP_SESSION_URL": "session_url",
    "JMAP_BEARER_TOKEN": "bearer_token",
    "JMAP_USER_AGENT": "user_agent",
    "JMAP_TIMEOUT": "timeout",
    "JMAP_MAX_RETRIES": "max_retries",
    "JMAP_RETRY_DELAY": "retry_delay",
    "JMAP_MAX_BATCH_SIZE": "max_batch_size",
    "JMAP_REQUEST_LOGGING": "enable_request_logging",
    "JMAP_SESSION_TTL": "session_ttl",
}


class ClientConfig(BaseModel):
    """Settings for one client instance.

    Durations are in seconds: ``timeout`` is per HTTP request,
    ``retry_delay`` is the base of the exponential backoff, ``session_ttl``
    bounds how long a fetched session is reused.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    session_url: str
    bearer_token: str = Field(min_length=1)
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)
    retry_delay: float = Field(default=DEFAULT_RETRY_DELAY, ge=0)
    max_batch_size: int = Field(default=DEFAULT_MAX_BATCH_SIZE, ge=1)
    enable_request_logging: bool = False
    session_ttl: float = Field(default=DEFAULT_SESSION_TTL, ge=0)

    @field_validator("session_url")
    @classmethod
    def check_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return value

    @model_validator(mode="wrap")
    @classmethod
    def as_configuration_error(cls, data: Any, handler: Callable[[Any], "ClientConfig"]) -> "ClientConfig":
        try:
            return handler(data)
        except ValidationError as e:
            err = e.errors()[0]
            field = ".".join(str(p) for p in err["loc"]) or None
            raise ConfigurationError(f"Invalid client configuration: {field}: {err['msg']}", field=field) from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "ClientConfig":
        """Build from JMAP_* environment variables; keyword overrides win."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for var, field in ENV_VARS.items():
            if var in env:
                data[field] = env[var]
        if "enable_request_logging" in data:
            data["enable_request_logging"] = data["enable_request_logging"].strip().lower() in ("1", "true", "yes", "on")
        data.update(overrides)
        for required, var in (("session_url", "JMAP_SESSION_URL"), ("bearer_token", "JMAP_BEARER_TOKEN")):
            if not data.get(required):
                raise ConfigurationError(f"{var} is not set", field=required)
        return cls(**data)


def default_config(session_url: str, bearer_token: str) -> ClientConfig:
    return ClientConfig(session_url=session_url, bearer_token=bearer_token)
