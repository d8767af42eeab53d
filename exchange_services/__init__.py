"""
Exchange Services Package.

Normalized exchange services built on the core validation
and retry primitives.

Components:
- base: service interfaces and the retried request pipeline
- config: ServiceConfig
- logging_utils: credential masking for logs
- kucoin: KuCoinService (market data and account)
- yobit: YobitService (market data)
- cli: command-line entry point
"""

from exchange_services.base import (
    AuthenticatedRestExchangeService,
    BaseExchangeService,
    RestExchangeService,
)
from exchange_services.config import ServiceConfig
from exchange_services.kucoin import (
    KuCoinExchangeCredentials,
    KuCoinResponseParser,
    KuCoinService,
    KuCoinSignatureMaker,
)
from exchange_services.logging_utils import mask_headers, mask_params, mask_value
from exchange_services.yobit import YobitResponseParser, YobitService


__all__ = [
    # Interfaces
    "RestExchangeService",
    "AuthenticatedRestExchangeService",
    "BaseExchangeService",

    # Configuration
    "ServiceConfig",

    # KuCoin
    "KuCoinService",
    "KuCoinExchangeCredentials",
    "KuCoinResponseParser",
    "KuCoinSignatureMaker",

    # Yobit
    "YobitService",
    "YobitResponseParser",

    # Logging
    "mask_value",
    "mask_headers",
    "mask_params",
]
