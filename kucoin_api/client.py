"""
KuCoin REST v1 - Client.

============================================================
RESPONSIBILITY
============================================================
Thin typed wrapper over the public KuCoin REST v1 endpoints.

- Builds the request, hands it to an HttpTransport
- Runs the body through the KuCoin envelope and the entity
  GuardsMap
- Returns the decoded value unchanged: the success envelope
  (checked on ``check_fields`` only, when given) or the error
  envelope

Every operation takes an optional ``check_fields`` selector
over the payload, e.g.::

    await client.order_books(("ETH", "BTC"), check_fields={"data": {"BUY": True}})

Shape mismatches raise ShapeMismatchError; the client does
not retry (see exchange_services for that).

============================================================
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from core.envelope import check_shape, decode_body, parse_envelope
from core.exceptions import ConfigurationError
from core.guards import GuardsMap, is_
from core.models import CurrencyPair
from core.selectors import FieldsSelector
from core.tradingview import TRADING_VIEW_ENVELOPE, TRADING_VIEW_ERROR_GUARDS_MAP, TRADING_VIEW_BARS_ARRAYS_GUARDS_MAP
from core.transport import AiohttpTransport, HttpTransport
from kucoin_api import constants
from kucoin_api.guards import (
    KUCOIN_ALL_COINS_TICK_GUARDS_MAP,
    KUCOIN_BUY_ORDER_BOOKS_GUARDS_MAP,
    KUCOIN_COIN_INFO_GUARDS_MAP,
    KUCOIN_ENVELOPE,
    KUCOIN_ERROR_RESPONSE_RESULT_GUARDS_MAP,
    KUCOIN_LIST_COINS_GUARDS_MAP,
    KUCOIN_LIST_EXCHANGE_RATE_OF_COINS_GUARDS_MAP,
    KUCOIN_LIST_LANGUAGES_GUARDS_MAP,
    KUCOIN_LIST_TRADING_MARKETS_GUARDS_MAP,
    KUCOIN_LIST_TRADING_SYMBOLS_TICK_GUARDS_MAP,
    KUCOIN_LIST_TRENDINGS_GUARDS_MAP,
    KUCOIN_ORDER_BOOKS_GUARDS_MAP,
    KUCOIN_RECENTLY_DEAL_ORDERS_GUARDS_MAP,
    KUCOIN_SELL_ORDER_BOOKS_GUARDS_MAP,
    KUCOIN_TICK_GUARDS_MAP,
    KUCOIN_TRADING_VIEW_KLINE_CONFIG_GUARDS_MAP,
    KUCOIN_TRADING_VIEW_SYMBOL_TICK_GUARDS_MAP,
)
from kucoin_api.types import KuCoinOrderType, KuCoinTypeCheckedOperationResult
from kucoin_api.utils import get_symbol


logger = logging.getLogger(__name__)


# ============================================================
# OPTIONS
# ============================================================

@dataclass(frozen=True)
class KuCoinRestV1Options:
    """Connection options for KuCoinRestV1."""

    server_uri: str = constants.SERVER_PRODUCTION_URL
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        if not self.server_uri.startswith(("http://", "https://")):
            raise ConfigurationError(
                "server_uri must be an http(s) URI",
                config_key="server_uri",
                actual_value=self.server_uri,
            )
        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                "timeout_seconds must be positive",
                config_key="timeout_seconds",
                actual_value=self.timeout_seconds,
            )


# ============================================================
# CLIENT
# ============================================================

class KuCoinRestV1:
    """
    KuCoin REST v1 public API.

    Usage:
        async with KuCoinRestV1() as client:
            books = await client.order_books(CurrencyPair("ETH", "BTC"))
            if books["success"]:
                ...
    """

    name = "kucoin"

    def __init__(
        self,
        options: Optional[KuCoinRestV1Options] = None,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._options = options or KuCoinRestV1Options()
        self._transport = transport or AiohttpTransport(
            timeout_seconds=self._options.timeout_seconds,
            name=self.name,
        )

    @property
    def server_uri(self) -> str:
        return self._options.server_uri

    # --------------------------------------------------------
    # Market data
    # --------------------------------------------------------

    async def list_exchange_rate_of_coins(
        self,
        coins: Optional[List[str]] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        params = {"coins": ",".join(coins)} if coins else None
        raw = await self._get(constants.LIST_EXCHANGE_RATE_OF_COINS_URI, params)
        return self._checked(
            raw, KUCOIN_LIST_EXCHANGE_RATE_OF_COINS_GUARDS_MAP, check_fields, "list exchange rate of coins"
        )

    async def list_languages(
        self,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.LIST_LANGUAGES_URI)
        return self._checked(raw, KUCOIN_LIST_LANGUAGES_GUARDS_MAP, check_fields, "language list")

    async def tick(
        self,
        symbol: Optional[CurrencyPair] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        """Tick of one symbol, or of all coins when ``symbol`` is omitted."""
        if symbol is None:
            raw = await self._get(constants.TICK_URI)
            return self._checked(raw, KUCOIN_ALL_COINS_TICK_GUARDS_MAP, check_fields, "all coins tick")

        raw = await self._get(constants.TICK_URI, {"symbol": get_symbol(symbol)})
        return self._checked(raw, KUCOIN_TICK_GUARDS_MAP, check_fields, "tick")

    async def order_books(
        self,
        symbol: CurrencyPair,
        group: Optional[int] = None,
        limit: Optional[int] = None,
        direction: Optional[KuCoinOrderType] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.ORDER_BOOKS_URI, {
            "symbol": get_symbol(symbol),
            "group": group,
            "limit": limit,
            "direction": direction.value if direction is not None else None,
        })
        return self._checked(raw, KUCOIN_ORDER_BOOKS_GUARDS_MAP, check_fields, "order book")

    async def buy_order_books(
        self,
        symbol: CurrencyPair,
        group: Optional[int] = None,
        limit: Optional[int] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.BUY_ORDER_BOOKS_URI, {
            "symbol": get_symbol(symbol),
            "group": group,
            "limit": limit,
        })
        return self._checked(raw, KUCOIN_BUY_ORDER_BOOKS_GUARDS_MAP, check_fields, "buy order book")

    async def sell_order_books(
        self,
        symbol: CurrencyPair,
        group: Optional[int] = None,
        limit: Optional[int] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.SELL_ORDER_BOOKS_URI, {
            "symbol": get_symbol(symbol),
            "group": group,
            "limit": limit,
        })
        return self._checked(raw, KUCOIN_SELL_ORDER_BOOKS_GUARDS_MAP, check_fields, "sell order book")

    async def recently_deal_orders(
        self,
        symbol: CurrencyPair,
        limit: Optional[int] = None,
        since: Optional[int] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.RECENTLY_DEAL_ORDERS_URI, {
            "symbol": get_symbol(symbol),
            "limit": limit,
            "since": since,
        })
        return self._checked(
            raw, KUCOIN_RECENTLY_DEAL_ORDERS_GUARDS_MAP, check_fields, "list of recently deal orders"
        )

    async def list_trading_markets(
        self,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.LIST_TRADING_MARKETS_URI)
        return self._checked(raw, KUCOIN_LIST_TRADING_MARKETS_GUARDS_MAP, check_fields, "list of trading markets")

    async def list_trading_symbols_tick(
        self,
        market: Optional[str] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.LIST_TRADING_SYMBOLS_TICK_URI, {"market": market})
        return self._checked(
            raw, KUCOIN_LIST_TRADING_SYMBOLS_TICK_GUARDS_MAP, check_fields, "list of trading symbols tick"
        )

    async def list_trendings(
        self,
        market: Optional[str] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.LIST_TRENDINGS_URI, {"market": market})
        return self._checked(raw, KUCOIN_LIST_TRENDINGS_GUARDS_MAP, check_fields, "list of trendings")

    async def get_coin_info(
        self,
        coin: str,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.GET_COIN_INFO_URI, {"coin": coin})
        return self._checked(raw, KUCOIN_COIN_INFO_GUARDS_MAP, check_fields, "coin info")

    async def list_coins(
        self,
        check_fields: Optional[FieldsSelector] = None,
    ) -> KuCoinTypeCheckedOperationResult:
        raw = await self._get(constants.LIST_COINS_URI)
        return self._checked(raw, KUCOIN_LIST_COINS_GUARDS_MAP, check_fields, "list of coin infos")

    # --------------------------------------------------------
    # TradingView UDF
    # --------------------------------------------------------

    async def get_trading_view_kline_config(
        self,
        check_fields: Optional[FieldsSelector] = None,
    ) -> Mapping[str, Any]:
        raw = await self._get(constants.TRADING_VIEW_KLINE_CONFIG_URI)
        return self._checked_bare(
            raw, KUCOIN_TRADING_VIEW_KLINE_CONFIG_GUARDS_MAP, check_fields, "TradingView KLine config"
        )

    async def get_trading_view_symbol_tick(
        self,
        symbol: CurrencyPair,
        check_fields: Optional[FieldsSelector] = None,
    ) -> Mapping[str, Any]:
        raw = await self._get(constants.TRADING_VIEW_SYMBOL_TICK_URI, {"symbol": get_symbol(symbol)})
        return self._checked_bare(
            raw, KUCOIN_TRADING_VIEW_SYMBOL_TICK_GUARDS_MAP, check_fields, "TradingView symbol tick"
        )

    async def get_trading_view_kline_data(
        self,
        symbol: CurrencyPair,
        from_: int,
        to: int,
        resolution: Optional[str] = None,
        check_fields: Optional[FieldsSelector] = None,
    ) -> Mapping[str, Any]:
        """
        Candles as TradingView bar arrays.

        Returns the bars, a TradingView error (``{"s": "error"}``)
        or a KuCoin error envelope.
        """
        raw = await self._get(constants.TRADING_VIEW_KLINE_DATA_URI, {
            "symbol": get_symbol(symbol),
            "resolution": resolution,
            "from": from_,
            "to": to,
        })
        obj = decode_body(raw, self.name)
        if is_(obj, KUCOIN_ERROR_RESPONSE_RESULT_GUARDS_MAP):
            return obj

        result = parse_envelope(
            raw,
            TRADING_VIEW_ENVELOPE,
            TRADING_VIEW_BARS_ARRAYS_GUARDS_MAP,
            check_fields,
            "TradingView KLine data",
        )
        return result.payload

    # --------------------------------------------------------
    # Internals
    # --------------------------------------------------------

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self.server_uri}{path}"
        logger.debug(f"[{self.name}] GET {url} params={params}")
        return await self._transport.request("GET", url, params=params)

    def _checked(
        self,
        raw: str,
        guards_map: GuardsMap,
        check_fields: Optional[FieldsSelector],
        description: str,
    ) -> KuCoinTypeCheckedOperationResult:
        result = parse_envelope(raw, KUCOIN_ENVELOPE, guards_map, check_fields, description)
        if result.is_error:
            logger.debug(f"[{self.name}] {description}: exchange error {result.code}: {result.message}")
        return result.payload

    def _checked_bare(
        self,
        raw: str,
        guards_map: GuardsMap,
        check_fields: Optional[FieldsSelector],
        description: str,
    ) -> Mapping[str, Any]:
        # TradingView endpoints answer without the KuCoin envelope
        obj = decode_body(raw, self.name)
        if is_(obj, KUCOIN_ERROR_RESPONSE_RESULT_GUARDS_MAP) or is_(obj, TRADING_VIEW_ERROR_GUARDS_MAP):
            return obj
        return check_shape(obj, guards_map, check_fields, description, self.name)

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def __aenter__(self) -> "KuCoinRestV1":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(server_uri={self.server_uri})>"
