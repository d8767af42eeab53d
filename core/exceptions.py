"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Defines the exception hierarchy shared by the exchange clients.

- Separates transport failures from response-shape failures
- Separates exchange-reported failures from both
- Carries context for debugging

============================================================
EXCEPTION HIERARCHY
============================================================
ExchangeServiceError (base)
├── ConfigurationError
├── TransportError
├── ResponseError
│   ├── MalformedResponseError
│   └── ShapeMismatchError
└── ApplicationError

Retry exhaustion has no class of its own: the bounded-retry
wrapper re-raises the last attempt's exception unchanged.

A service retries TransportError and ShapeMismatchError.
MalformedResponseError and ApplicationError end the call on
the first attempt.

============================================================
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ============================================================
# BASE EXCEPTION
# ============================================================

class ExchangeServiceError(Exception):
    """
    Base exception for all exchange client errors.

    All exceptions carry:
    - source_name: the exchange or component that raised it
    - original_error: the underlying cause, if any
    - context: free-form debugging details
    - timestamp: when the error occurred
    """

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        original_error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source_name = source_name
        self.original_error = original_error
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]
        if self.source_name:
            parts.append(f"[source={self.source_name}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


# ============================================================
# CONFIGURATION ERRORS
# ============================================================

class ConfigurationError(ExchangeServiceError):
    """Invalid configuration, raised at construction time."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.config_key = config_key
        if config_key:
            self.context["config_key"] = config_key
        if actual_value is not None:
            self.context["actual_value"] = str(actual_value)[:100]


# ============================================================
# TRANSPORT ERRORS
# ============================================================

class TransportError(ExchangeServiceError):
    """Request failed before a usable body arrived (network, non-2xx, timeout)."""

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
        original_error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, source_name, original_error, context)
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url


# ============================================================
# RESPONSE ERRORS
# ============================================================

class ResponseError(ExchangeServiceError):
    """A body arrived but could not be turned into a known response."""


class MalformedResponseError(ResponseError):
    """Body is not decodable as JSON."""

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        raw_body: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, source_name, original_error)
        self.raw_body = raw_body


class ShapeMismatchError(ResponseError):
    """Decoded value does not match any known variant of the expected response."""

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        reason: Optional[str] = None,
        value: Optional[Any] = None,
    ) -> None:
        super().__init__(message, source_name)
        self.reason = reason
        self.value = value
        if reason:
            self.context["reason"] = reason


# ============================================================
# APPLICATION ERRORS
# ============================================================

class ApplicationError(ExchangeServiceError):
    """
    Exchange-reported failure.

    Raised from a successfully validated error envelope, e.g.
    ``{"success": false, "code": "ERROR", "msg": "SYMBOL NOT FOUND"}``.
    """

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        code: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, source_name)
        self.code = code
        self.payload = payload or {}

    @property
    def msg(self) -> str:
        """Exchange message, as reported."""
        return self.message
