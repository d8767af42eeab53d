"""
Yobit Service.

Public market data only; Yobit's trade API is not covered.
"""

from typing import Any, List, Optional

from core.models import CurrencyPair, Order, OrderBook
from core.transport import HttpTransport
from exchange_services.base import BaseExchangeService, RestExchangeService
from exchange_services.config import ServiceConfig
from exchange_services.yobit.response_parser import YobitResponseParser
from exchange_services.yobit.utils import SERVER_PRODUCTION_URL, get_depth_uri, get_pair_symbol, get_trades_uri


class YobitService(BaseExchangeService, RestExchangeService):
    """Yobit public API v3."""

    name = "yobit"

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        transport: Optional[HttpTransport] = None,
        parser: Optional[YobitResponseParser] = None,
    ) -> None:
        super().__init__(config or ServiceConfig(SERVER_PRODUCTION_URL), transport)
        self._parser = parser or YobitResponseParser()

    @classmethod
    def from_env(cls, **kwargs: Any) -> "YobitService":
        """Build from ``YOBIT_*`` environment variables."""
        return cls(ServiceConfig.from_env("YOBIT", SERVER_PRODUCTION_URL), **kwargs)

    async def get_order_book(self, pair: CurrencyPair, max_limit: Optional[int] = None) -> OrderBook:
        return await self._call(
            "GET",
            get_depth_uri(get_pair_symbol(pair)),
            lambda raw: self._parser.parse_order_book(raw, pair),
            params={"limit": max_limit},
        )

    async def get_trades(self, pair: CurrencyPair, max_limit: Optional[int] = None) -> List[Order]:
        return await self._call(
            "GET",
            get_trades_uri(get_pair_symbol(pair)),
            lambda raw: self._parser.parse_trades(raw, pair),
            params={"limit": max_limit},
        )
