"""
KuCoin Service.

============================================================
RESPONSIBILITY
============================================================
Normalized KuCoin market data and account operations.

- Every operation runs under the bounded retry of
  BaseExchangeService, account reads included
- Signed requests get a fresh nonce and signature on every
  attempt
- Exchange errors surface as ApplicationError, e.g. code
  ``ERROR`` / msg ``SYMBOL NOT FOUND`` for an unknown pair

============================================================
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from core.clock import MillisecondNonceFactory
from core.models import CurrencyBalance, CurrencyPair, IdentifiedOrder, Order, OrderBook, OrderInfo
from core.transport import HttpTransport
from exchange_services.base import AuthenticatedRestExchangeService, BaseExchangeService, RestExchangeService
from exchange_services.config import ServiceConfig
from exchange_services.kucoin.credentials import KuCoinExchangeCredentials
from exchange_services.kucoin.response_parser import KuCoinResponseParser
from exchange_services.kucoin.signature import KuCoinSignatureMaker
from kucoin_api import constants
from kucoin_api.utils import get_order_type, get_symbol


logger = logging.getLogger(__name__)


class KuCoinService(BaseExchangeService, RestExchangeService, AuthenticatedRestExchangeService):
    """
    KuCoin REST v1 exchange service.

    Usage:
        async with KuCoinService() as service:
            book = await service.get_order_book(CurrencyPair("ETH", "BTC"))
    """

    name = "kucoin"

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        transport: Optional[HttpTransport] = None,
        nonce_factory: Optional[Callable[[], int]] = None,
        signature_maker: Optional[KuCoinSignatureMaker] = None,
        parser: Optional[KuCoinResponseParser] = None,
    ) -> None:
        super().__init__(config or ServiceConfig(constants.SERVER_PRODUCTION_URL), transport)
        self._nonce_factory = nonce_factory or MillisecondNonceFactory()
        self._signature_maker = signature_maker or KuCoinSignatureMaker()
        self._parser = parser or KuCoinResponseParser()

    @classmethod
    def from_env(cls, **kwargs: Any) -> "KuCoinService":
        """Build from ``KUCOIN_*`` environment variables."""
        return cls(ServiceConfig.from_env("KUCOIN", constants.SERVER_PRODUCTION_URL), **kwargs)

    # --------------------------------------------------------
    # Market data
    # --------------------------------------------------------

    async def get_order_book(self, pair: CurrencyPair, max_limit: Optional[int] = None) -> OrderBook:
        return await self._call(
            "GET",
            constants.ORDER_BOOKS_URI,
            lambda raw: self._parser.parse_order_book(raw, pair),
            params={"symbol": get_symbol(pair), "limit": max_limit},
        )

    async def get_trades(self, pair: CurrencyPair, max_limit: Optional[int] = None) -> List[Order]:
        return await self._call(
            "GET",
            constants.RECENTLY_DEAL_ORDERS_URI,
            lambda raw: self._parser.parse_trades(raw, pair),
            params={"symbol": get_symbol(pair), "limit": max_limit},
        )

    # --------------------------------------------------------
    # Account
    # --------------------------------------------------------

    async def create_order(self, order: Order, credentials: KuCoinExchangeCredentials) -> IdentifiedOrder:
        params = {
            "amount": order.amount,
            "price": order.price,
            "symbol": get_symbol(order.pair),
            "type": get_order_type(order.order_type),
        }
        identified = await self._call(
            "POST",
            constants.CREATE_ORDER_URI,
            lambda raw: self._parser.parse_created_order(raw, order),
            params=params,
            headers_factory=self._auth_headers_factory(credentials, constants.CREATE_ORDER_URI, params),
        )
        logger.info(f"[{self.name}] Created {order.order_type.value} order {identified.id} on {order.pair}")
        return identified

    async def delete_order(self, order: IdentifiedOrder, credentials: KuCoinExchangeCredentials) -> None:
        params = self._order_params(order)
        await self._call(
            "POST",
            constants.DELETE_ORDER_URI,
            self._parser.parse_deleted_order,
            params=params,
            headers_factory=self._auth_headers_factory(credentials, constants.DELETE_ORDER_URI, params),
        )
        logger.info(f"[{self.name}] Deleted order {order.id} on {order.pair}")

    async def get_order_info(self, order: IdentifiedOrder, credentials: KuCoinExchangeCredentials) -> OrderInfo:
        params = self._order_params(order)
        return await self._call(
            "GET",
            constants.ORDER_INFO_URI,
            self._parser.parse_order_info,
            params=params,
            headers_factory=self._auth_headers_factory(credentials, constants.ORDER_INFO_URI, params),
        )

    async def get_active_orders(
        self,
        pair: CurrencyPair,
        credentials: KuCoinExchangeCredentials,
    ) -> List[IdentifiedOrder]:
        params = {"symbol": get_symbol(pair)}
        return await self._call(
            "GET",
            constants.ACTIVE_ORDERS_URI,
            lambda raw: self._parser.parse_active_orders(raw, pair),
            params=params,
            headers_factory=self._auth_headers_factory(credentials, constants.ACTIVE_ORDERS_URI, params),
        )

    async def get_balance(self, currency: str, credentials: KuCoinExchangeCredentials) -> CurrencyBalance:
        endpoint = constants.get_balance_of_coin_uri(currency)
        return await self._call(
            "GET",
            endpoint,
            lambda raw: self._parser.parse_currency_balance(raw, currency),
            headers_factory=self._auth_headers_factory(credentials, endpoint, None),
        )

    # --------------------------------------------------------
    # Signing
    # --------------------------------------------------------

    def auth_headers(
        self,
        credentials: KuCoinExchangeCredentials,
        endpoint: str,
        query: Optional[Mapping[str, Any]],
    ) -> Dict[str, str]:
        """Signed headers for one request, with a new nonce."""
        nonce = self._nonce_factory()
        return {
            constants.API_KEY_HEADER: credentials.api_key,
            constants.API_NONCE_HEADER: str(nonce),
            constants.API_SIGNATURE_HEADER: self._signature_maker.sign(credentials.secret, endpoint, query, nonce),
        }

    def _auth_headers_factory(
        self,
        credentials: KuCoinExchangeCredentials,
        endpoint: str,
        query: Optional[Mapping[str, Any]],
    ) -> Callable[[], Dict[str, str]]:
        return lambda: self.auth_headers(credentials, endpoint, query)

    @staticmethod
    def _order_params(order: IdentifiedOrder) -> Dict[str, Any]:
        return {
            "orderOid": order.id,
            "symbol": get_symbol(order.pair),
            "type": get_order_type(order.order_type),
        }
