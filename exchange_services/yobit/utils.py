"""
Yobit Service - Symbol formatting.
"""

from core.models import CurrencyPair, OrderType


SERVER_PRODUCTION_URL = "https://yobit.net"


def get_depth_uri(pair_symbol: str) -> str:
    return f"/api/3/depth/{pair_symbol}"


def get_trades_uri(pair_symbol: str) -> str:
    return f"/api/3/trades/{pair_symbol}"


def get_pair_symbol(pair: CurrencyPair) -> str:
    """``("eth", "btc")`` -> ``"eth_btc"``; Yobit expects lowercase symbols."""
    return f"{pair[0]}_{pair[1]}".lower()


def get_order_type_symbol(order_type: OrderType) -> str:
    return order_type.name.lower()
