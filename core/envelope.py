"""
Core Module - Response Envelope State Machine.

============================================================
RESPONSIBILITY
============================================================
Turns a raw response body into exactly one of:

- SuccessResponse: discriminator says success, success and
  payload shapes validate (payload optionally selector-scoped)
- ErrorResponse: discriminator says failure, error shape
  validates; the exchange reported an application error
- ShapeMismatchError (raised): nothing known matches

============================================================
STATES
============================================================
RAW_RECEIVED
  -> decode fails                     MalformedResponseError
DISCRIMINANT_CHECKED
  -> discriminator fails              SHAPE_MISMATCH
SUCCESS_SHAPE_CHECKED | ERROR_SHAPE_CHECKED
  -> shape fails                      SHAPE_MISMATCH
SUCCESS | ERROR

The discriminator alone picks the variant. Payload fields are
only looked at after that, so an error envelope that happens
to carry success-looking fields is still an error.

A mismatch is never retried here; retrying is the caller's
business (see core.retry).

============================================================
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

from core.exceptions import ApplicationError, MalformedResponseError, ShapeMismatchError
from core.guards import GuardsMap, Rules, Selector, validate


logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class ResponseState(Enum):
    """States a response passes through while being parsed."""
    RAW_RECEIVED = "raw_received"
    DISCRIMINANT_CHECKED = "discriminant_checked"
    SUCCESS_SHAPE_CHECKED = "success_shape_checked"
    ERROR_SHAPE_CHECKED = "error_shape_checked"
    SUCCESS = "success"
    ERROR = "error"
    SHAPE_MISMATCH = "shape_mismatch"


@dataclass(frozen=True)
class EnvelopeSpec:
    """Outer success/error wrapper common to all responses of one API."""
    name: str
    discriminator: GuardsMap
    is_error: Callable[[Mapping[str, Any]], bool]
    error_shape: GuardsMap
    success_shape: GuardsMap = field(default_factory=dict)
    code_key: Optional[str] = None
    message_key: Optional[str] = None


# ============================================================
# RESPONSE VARIANTS
# ============================================================

@dataclass(frozen=True)
class SuccessResponse(Generic[T]):
    """Validated success variant."""
    payload: T

    @property
    def is_error(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> "SuccessResponse[U]":
        return SuccessResponse(fn(self.payload))

    def unwrap(self) -> T:
        return self.payload


@dataclass(frozen=True)
class ErrorResponse:
    """Validated error variant; an exchange-reported failure."""
    payload: Mapping[str, Any]
    message: str
    code: Optional[str] = None
    source_name: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> "ErrorResponse":
        return self

    def unwrap(self) -> Any:
        raise ApplicationError(
            self.message,
            source_name=self.source_name,
            code=self.code,
            payload=dict(self.payload),
        )


ResponseResult = Union[SuccessResponse[T], ErrorResponse]


# ============================================================
# PARSING
# ============================================================

def decode_body(raw: Union[str, bytes], source_name: Optional[str] = None) -> Any:
    """
    Decode a JSON body.

    Raises:
        MalformedResponseError: If the body is not decodable
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        text = raw.decode("utf-8", "replace") if isinstance(raw, (bytes, bytearray)) else str(raw)
        raise MalformedResponseError(
            message="Response body is not valid JSON",
            source_name=source_name,
            raw_body=text[:1000],
            original_error=e,
        )


def check_shape(
    value: Any,
    shape: Rules,
    selector: Optional[Selector] = None,
    description: str = "response",
    source_name: Optional[str] = None,
) -> Any:
    """
    Validate a value that has no envelope.

    Returns:
        The value, unchanged

    Raises:
        ShapeMismatchError: If the value does not match
    """
    result = validate(value, shape, selector)
    if not result.matched:
        raise ShapeMismatchError(
            message=f"The result isn't the {description} type",
            source_name=source_name,
            reason=result.reason,
            value=value,
        )
    return value


def parse_envelope(
    raw: Union[str, bytes],
    spec: EnvelopeSpec,
    payload_shape: GuardsMap,
    selector: Optional[Selector] = None,
    description: str = "response",
) -> ResponseResult[Any]:
    """
    Run a raw body through the envelope state machine.

    Args:
        raw: Response body
        spec: Envelope of the API
        payload_shape: Rules for the entity on the success branch
        selector: Optional subset of payload fields to check
        description: Entity name for error messages

    Returns:
        SuccessResponse with the decoded value, or ErrorResponse

    Raises:
        MalformedResponseError: Body is not JSON
        ShapeMismatchError: Body matches no known variant
    """
    state = ResponseState.RAW_RECEIVED
    obj = decode_body(raw, spec.name)

    result = validate(obj, spec.discriminator)
    if not result.matched:
        _transition(spec, state, ResponseState.SHAPE_MISMATCH)
        raise _mismatch(spec, f"{spec.name} response result", result.reason, obj)
    state = _transition(spec, state, ResponseState.DISCRIMINANT_CHECKED)

    if spec.is_error(obj):
        result = validate(obj, spec.error_shape)
        if not result.matched:
            _transition(spec, state, ResponseState.SHAPE_MISMATCH)
            raise _mismatch(spec, f"{spec.name} error response", result.reason, obj)
        state = _transition(spec, state, ResponseState.ERROR_SHAPE_CHECKED)
        _transition(spec, state, ResponseState.ERROR)
        return ErrorResponse(
            payload=obj,
            message=str(obj.get(spec.message_key, "")) if spec.message_key else "",
            code=obj.get(spec.code_key) if spec.code_key else None,
            source_name=spec.name,
        )

    result = validate(obj, spec.success_shape)
    if result.matched:
        result = validate(obj, payload_shape, selector)
    if not result.matched:
        _transition(spec, state, ResponseState.SHAPE_MISMATCH)
        raise _mismatch(spec, f"{spec.name} {description}", result.reason, obj)
    state = _transition(spec, state, ResponseState.SUCCESS_SHAPE_CHECKED)
    _transition(spec, state, ResponseState.SUCCESS)
    return SuccessResponse(obj)


def _transition(spec: EnvelopeSpec, current: ResponseState, new: ResponseState) -> ResponseState:
    logger.debug(f"[{spec.name}] {current.value} -> {new.value}")
    return new


def _mismatch(spec: EnvelopeSpec, description: str, reason: Optional[str], value: Any) -> ShapeMismatchError:
    return ShapeMismatchError(
        message=f"The result isn't the {description} type",
        source_name=spec.name,
        reason=reason,
        value=value,
    )
