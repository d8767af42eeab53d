"""
Exchange Services - Configuration.

============================================================
RESPONSIBILITY
============================================================
Explicit, validated configuration for one exchange service.

- Invalid values fail at construction (ConfigurationError)
- Environment loading goes through ``.env`` first

============================================================
ENVIRONMENT
============================================================
For ``ServiceConfig.from_env("KUCOIN", ...)``:

    KUCOIN_SERVER_URI           override of the server URI
    KUCOIN_REQUEST_TRY_COUNT    attempts per request (>= 1)
    KUCOIN_TIMEOUT_SECONDS      per-request timeout

============================================================
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from core.exceptions import ConfigurationError
from core.retry import DEFAULT_MAX_ATTEMPTS


DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration of a REST exchange service."""

    server_uri: str
    request_try_count: int = DEFAULT_MAX_ATTEMPTS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if not isinstance(self.server_uri, str) or not self.server_uri.startswith(("http://", "https://")):
            raise ConfigurationError(
                "server_uri must be an http(s) URI",
                config_key="server_uri",
                actual_value=self.server_uri,
            )
        if self.request_try_count < 1:
            raise ConfigurationError(
                "request_try_count must be at least 1",
                config_key="request_try_count",
                actual_value=self.request_try_count,
            )
        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                "timeout_seconds must be positive",
                config_key="timeout_seconds",
                actual_value=self.timeout_seconds,
            )

    @classmethod
    def from_env(cls, prefix: str, default_server_uri: str) -> "ServiceConfig":
        """Load configuration from environment variables (after ``.env``)."""
        load_dotenv()
        prefix = prefix.upper()
        try:
            return cls(
                server_uri=os.getenv(f"{prefix}_SERVER_URI", default_server_uri),
                request_try_count=int(os.getenv(f"{prefix}_REQUEST_TRY_COUNT", str(DEFAULT_MAX_ATTEMPTS))),
                timeout_seconds=float(os.getenv(f"{prefix}_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))),
            )
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid {prefix} service configuration: {e}",
                original_error=e,
            )
