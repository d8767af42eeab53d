"""
Core Module Package.

Shared infrastructure for all exchange clients.

Components:
- guards: Guard, GuardsMap, ArrayRule, validator (is_ / validate)
- selectors: field selectors and the projector
- retry: bounded-retry wrapper
- envelope: response envelope state machine
- models: normalized domain model
- exceptions: exception hierarchy
- clock: time source and nonces
- transport: HTTP transport
- tradingview: TradingView UDF shapes
- logging_config: root logger setup
"""

from core.clock import ClockProtocol, MillisecondNonceFactory, MockClock, SystemClock
from core.envelope import (
    EnvelopeSpec,
    ErrorResponse,
    ResponseResult,
    ResponseState,
    SuccessResponse,
    check_shape,
    decode_body,
    parse_envelope,
)
from core.exceptions import (
    ApplicationError,
    ConfigurationError,
    ExchangeServiceError,
    MalformedResponseError,
    ResponseError,
    ShapeMismatchError,
    TransportError,
)
from core.guards import (
    ArrayRule,
    Guard,
    GuardsMap,
    ValidationResult,
    equals,
    is_,
    is_bool,
    is_int,
    is_list,
    is_mapping,
    is_null,
    is_number,
    is_str,
    list_of,
    mapping_of,
    one_of,
    optional,
    tuple_of,
    unchecked,
    validate,
)
from core.logging_config import JsonFormatter, setup_logging
from core.models import (
    CurrencyBalance,
    CurrencyPair,
    IdentifiedOrder,
    Order,
    OrderBook,
    OrderInfo,
    OrderType,
    to_decimal,
)
from core.retry import BoundedRetry, RetryAttempt, retry_call
from core.selectors import (
    INCLUDE,
    FieldsSelector,
    FieldsSelectorResult,
    merge_selectors,
    project,
)
from core.tradingview import (
    TRADING_VIEW_BARS_ARRAYS_GUARDS_MAP,
    TRADING_VIEW_ENVELOPE,
    TRADING_VIEW_ERROR_GUARDS_MAP,
    TradingViewBarsArrays,
    TradingViewError,
)
from core.transport import AiohttpTransport, HttpTransport, clean_params


__all__ = [
    # Guards
    "Guard",
    "GuardsMap",
    "ArrayRule",
    "ValidationResult",
    "validate",
    "is_",
    "is_bool",
    "is_str",
    "is_int",
    "is_number",
    "is_null",
    "is_mapping",
    "is_list",
    "equals",
    "one_of",
    "optional",
    "tuple_of",
    "list_of",
    "mapping_of",
    "unchecked",

    # Selectors
    "INCLUDE",
    "FieldsSelector",
    "FieldsSelectorResult",
    "project",
    "merge_selectors",

    # Retry
    "BoundedRetry",
    "RetryAttempt",
    "retry_call",

    # Envelope
    "EnvelopeSpec",
    "ResponseState",
    "ResponseResult",
    "SuccessResponse",
    "ErrorResponse",
    "decode_body",
    "parse_envelope",
    "check_shape",

    # TradingView
    "TradingViewBarsArrays",
    "TradingViewError",
    "TRADING_VIEW_BARS_ARRAYS_GUARDS_MAP",
    "TRADING_VIEW_ERROR_GUARDS_MAP",
    "TRADING_VIEW_ENVELOPE",

    # Models
    "OrderType",
    "CurrencyPair",
    "Order",
    "IdentifiedOrder",
    "OrderBook",
    "CurrencyBalance",
    "OrderInfo",
    "to_decimal",

    # Exceptions
    "ExchangeServiceError",
    "ConfigurationError",
    "TransportError",
    "ResponseError",
    "MalformedResponseError",
    "ShapeMismatchError",
    "ApplicationError",

    # Infrastructure
    "ClockProtocol",
    "SystemClock",
    "MockClock",
    "MillisecondNonceFactory",
    "HttpTransport",
    "AiohttpTransport",
    "clean_params",
    "setup_logging",
    "JsonFormatter",
]
