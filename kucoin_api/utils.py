"""
KuCoin REST v1 - Symbol and order type formatting.
"""

from core.models import CurrencyPair, OrderType
from kucoin_api.types import KuCoinOrderType


def get_symbol(pair: CurrencyPair) -> str:
    """``("ETH", "BTC")`` -> ``"ETH-BTC"``."""
    return f"{pair[0]}-{pair[1]}"


def get_order_type(order_type: OrderType) -> str:
    return KuCoinOrderType.BUY.value if order_type == OrderType.BUY else KuCoinOrderType.SELL.value


def parse_order_type(value: str) -> OrderType:
    """Inverse of get_order_type; the value must already be validated."""
    return OrderType.BUY if value == KuCoinOrderType.BUY.value else OrderType.SELL
