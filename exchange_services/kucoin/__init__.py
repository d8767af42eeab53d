"""
KuCoin exchange service.
"""

from exchange_services.kucoin.credentials import KuCoinExchangeCredentials
from exchange_services.kucoin.response_parser import ORDER_BOOK_FIELDS, KuCoinResponseParser
from exchange_services.kucoin.service import KuCoinService
from exchange_services.kucoin.signature import KuCoinSignatureMaker


__all__ = [
    "KuCoinService",
    "KuCoinExchangeCredentials",
    "KuCoinResponseParser",
    "KuCoinSignatureMaker",
    "ORDER_BOOK_FIELDS",
]
