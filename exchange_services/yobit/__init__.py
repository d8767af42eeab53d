"""
Yobit exchange service.
"""

from exchange_services.yobit.response_parser import YOBIT_ENVELOPE, YobitResponseParser
from exchange_services.yobit.service import YobitService
from exchange_services.yobit.utils import get_order_type_symbol, get_pair_symbol


__all__ = [
    "YobitService",
    "YobitResponseParser",
    "YOBIT_ENVELOPE",
    "get_pair_symbol",
    "get_order_type_symbol",
]
