"""
KuCoin REST v1 API Package.

Components:
- constants: endpoint catalogue and auth header names
- types: TypedDict shapes of the responses
- guards: GuardsMaps and the KuCoin envelope
- utils: symbol and order type formatting
- client: KuCoinRestV1
"""

from kucoin_api import constants
from kucoin_api.client import KuCoinRestV1, KuCoinRestV1Options
from kucoin_api.guards import KUCOIN_ENVELOPE, is_kucoin_order_type
from kucoin_api.types import (
    KuCoinErrorResponseResult,
    KuCoinOrderType,
    KuCoinResponseResult,
    KuCoinSuccessResponseResult,
    KuCoinTypeCheckedOperationResult,
)
from kucoin_api.utils import get_order_type, get_symbol, parse_order_type


__all__ = [
    "constants",
    "KuCoinRestV1",
    "KuCoinRestV1Options",
    "KUCOIN_ENVELOPE",
    "is_kucoin_order_type",
    "KuCoinOrderType",
    "KuCoinResponseResult",
    "KuCoinErrorResponseResult",
    "KuCoinSuccessResponseResult",
    "KuCoinTypeCheckedOperationResult",
    "get_symbol",
    "get_order_type",
    "parse_order_type",
]
