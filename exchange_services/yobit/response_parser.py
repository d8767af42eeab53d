"""
Yobit Service - Response Parser.

Yobit has no success wrapper: a successful body is keyed by
the pair symbol (``{"eth_btc": {...}}``). Failures come as
``{"success": 0, "error": "..."}``.
"""

from typing import Any, List, Optional

from core.envelope import EnvelopeSpec, ResponseResult, parse_envelope
from core.guards import ArrayRule, GuardsMap, equals, is_int, is_list, is_number, is_str, one_of, tuple_of
from core.models import CurrencyPair, Order, OrderBook, OrderType, to_decimal
from core.selectors import INCLUDE, FieldsSelector, merge_selectors
from exchange_services.yobit.utils import get_pair_symbol


YOBIT_ERROR_RESPONSE_GUARDS_MAP = {
    "success": equals(0),
    "error": is_str,
}

YOBIT_ENVELOPE = EnvelopeSpec(
    name="yobit",
    discriminator={},
    is_error=lambda obj: "success" in obj,
    error_shape=YOBIT_ERROR_RESPONSE_GUARDS_MAP,
    message_key="error",
)

# price, amount
is_yobit_order = tuple_of(is_number, is_number, strict=True)

_ORDERS = ArrayRule(this=is_list, every=is_yobit_order)

YOBIT_ORDER_BOOK_GUARDS_MAP = {
    "asks": _ORDERS,
    "bids": _ORDERS,
}

YOBIT_TRADE_GUARDS_MAP = {
    "type": one_of("bid", "ask"),
    "price": is_number,
    "amount": is_number,
    "tid": is_int,
    "timestamp": is_int,
}

# The trade conversion reads only these fields.
TRADE_FIELDS = {"type": INCLUDE, "price": INCLUDE, "amount": INCLUDE}


def order_book_guards_map(pair_symbol: str) -> GuardsMap:
    return {pair_symbol: YOBIT_ORDER_BOOK_GUARDS_MAP}


def trades_guards_map(pair_symbol: str) -> GuardsMap:
    return {pair_symbol: ArrayRule(this=is_list, every=YOBIT_TRADE_GUARDS_MAP)}


class YobitResponseParser:
    """Raw Yobit body -> ResponseResult of domain objects."""

    def parse_order_book(self, raw: str, pair: CurrencyPair) -> ResponseResult[OrderBook]:
        symbol = get_pair_symbol(pair)
        result = parse_envelope(raw, YOBIT_ENVELOPE, order_book_guards_map(symbol), description="order book")
        return result.map(lambda obj: OrderBook(
            buy_orders=self._orders(obj[symbol]["bids"], pair, OrderType.BUY),
            sell_orders=self._orders(obj[symbol]["asks"], pair, OrderType.SELL),
        ))

    def parse_trades(
        self,
        raw: str,
        pair: CurrencyPair,
        check_fields: Optional[FieldsSelector] = None,
    ) -> ResponseResult[List[Order]]:
        """
        Recent trades of ``pair``.

        ``check_fields`` selects further trade fields to check,
        e.g. ``{"tid": True, "timestamp": True}``.
        """
        symbol = get_pair_symbol(pair)
        result = parse_envelope(
            raw,
            YOBIT_ENVELOPE,
            trades_guards_map(symbol),
            {symbol: merge_selectors(TRADE_FIELDS, check_fields or {})},
            "trades",
        )
        return result.map(lambda obj: [
            Order(
                pair=pair,
                order_type=OrderType.BUY if trade["type"] == "bid" else OrderType.SELL,
                price=to_decimal(trade["price"]),
                amount=to_decimal(trade["amount"]),
            )
            for trade in obj[symbol]
        ])

    @staticmethod
    def _orders(rows: List[Any], pair: CurrencyPair, order_type: OrderType) -> List[Order]:
        return [
            Order(pair=pair, order_type=order_type, price=to_decimal(row[0]), amount=to_decimal(row[1]))
            for row in rows
        ]
