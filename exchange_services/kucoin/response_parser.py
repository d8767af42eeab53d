"""
KuCoin Service - Response Parser.

============================================================
RESPONSIBILITY
============================================================
Turns raw KuCoin bodies into the normalized domain model.

- Every body goes through KUCOIN_ENVELOPE first
- Only the fields the conversion reads are checked
- Returns a ResponseResult; an error envelope stays a value
  until the caller unwraps it

============================================================
"""

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from core.envelope import ResponseResult, parse_envelope
from core.exceptions import ShapeMismatchError
from core.models import (
    CurrencyBalance,
    CurrencyPair,
    IdentifiedOrder,
    Order,
    OrderBook,
    OrderInfo,
    OrderType,
    to_decimal,
)
from core.selectors import INCLUDE, FieldsSelector, merge_selectors
from kucoin_api.guards import (
    KUCOIN_ACTIVE_ORDERS_GUARDS_MAP,
    KUCOIN_BALANCE_GUARDS_MAP,
    KUCOIN_CREATED_ORDER_GUARDS_MAP,
    KUCOIN_DELETED_ORDER_GUARDS_MAP,
    KUCOIN_ENVELOPE,
    KUCOIN_ORDER_BOOKS_GUARDS_MAP,
    KUCOIN_ORDER_INFO_GUARDS_MAP,
    KUCOIN_RECENTLY_DEAL_ORDERS_GUARDS_MAP,
)
from kucoin_api.utils import parse_order_type


# The order book conversion reads only the two sides; a caller
# selector is merged on top.
ORDER_BOOK_FIELDS = {"data": {"BUY": INCLUDE, "SELL": INCLUDE}}


class KuCoinResponseParser:
    """Raw KuCoin body -> ResponseResult of domain objects."""

    def parse_order_book(
        self,
        raw: str,
        pair: CurrencyPair,
        check_fields: Optional[FieldsSelector] = None,
    ) -> ResponseResult[OrderBook]:
        """
        Order book of ``pair``.

        Only the two sides are checked unless ``check_fields``
        asks for more, e.g. ``{"data": {"timestamp": True}}``.
        """
        selector = merge_selectors(ORDER_BOOK_FIELDS, check_fields or {})
        result = parse_envelope(raw, KUCOIN_ENVELOPE, KUCOIN_ORDER_BOOKS_GUARDS_MAP, selector, "order book")
        return result.map(lambda obj: OrderBook(
            buy_orders=self._book_side(obj["data"]["BUY"], pair, OrderType.BUY),
            sell_orders=self._book_side(obj["data"]["SELL"], pair, OrderType.SELL),
        ))

    def parse_trades(self, raw: str, pair: CurrencyPair) -> ResponseResult[List[Order]]:
        result = parse_envelope(raw, KUCOIN_ENVELOPE, KUCOIN_RECENTLY_DEAL_ORDERS_GUARDS_MAP, description="trades")
        # timestamp, type, price, amount, volume
        return result.map(lambda obj: [
            Order(
                pair=pair,
                order_type=parse_order_type(deal[1]),
                price=to_decimal(deal[2]),
                amount=to_decimal(deal[3]),
            )
            for deal in obj["data"]
        ])

    def parse_currency_balance(self, raw: str, currency: str) -> ResponseResult[CurrencyBalance]:
        result = parse_envelope(raw, KUCOIN_ENVELOPE, KUCOIN_BALANCE_GUARDS_MAP, description="currency balance")
        return result.map(lambda obj: self._balance(obj, currency))

    def parse_created_order(self, raw: str, order: Order) -> ResponseResult[IdentifiedOrder]:
        result = parse_envelope(raw, KUCOIN_ENVELOPE, KUCOIN_CREATED_ORDER_GUARDS_MAP, description="created order")
        return result.map(lambda obj: IdentifiedOrder(
            pair=order.pair,
            order_type=order.order_type,
            price=order.price,
            amount=order.amount,
            id=obj["data"]["orderOid"],
        ))

    def parse_deleted_order(self, raw: str) -> ResponseResult[None]:
        result = parse_envelope(raw, KUCOIN_ENVELOPE, KUCOIN_DELETED_ORDER_GUARDS_MAP, description="deleted order")
        return result.map(lambda obj: None)

    def parse_order_info(self, raw: str) -> ResponseResult[OrderInfo]:
        result = parse_envelope(raw, KUCOIN_ENVELOPE, KUCOIN_ORDER_INFO_GUARDS_MAP, description="order info")
        return result.map(lambda obj: self._order_info(obj["data"]))

    def parse_active_orders(self, raw: str, pair: CurrencyPair) -> ResponseResult[List[IdentifiedOrder]]:
        result = parse_envelope(raw, KUCOIN_ENVELOPE, KUCOIN_ACTIVE_ORDERS_GUARDS_MAP, description="active orders")
        return result.map(lambda obj: (
            self._active_side(obj["data"]["BUY"], pair) + self._active_side(obj["data"]["SELL"], pair)
        ))

    # --------------------------------------------------------
    # Conversions
    # --------------------------------------------------------

    @staticmethod
    def _book_side(rows: List[Any], pair: CurrencyPair, order_type: OrderType) -> List[Order]:
        # price, amount, volume
        return [
            Order(pair=pair, order_type=order_type, price=to_decimal(row[0]), amount=to_decimal(row[1]))
            for row in rows
        ]

    @staticmethod
    def _active_side(rows: List[Any], pair: CurrencyPair) -> List[IdentifiedOrder]:
        # timestamp, type, price, amount, dealAmount, orderOid
        return [
            IdentifiedOrder(
                pair=pair,
                order_type=parse_order_type(row[1]),
                price=to_decimal(row[2]),
                amount=to_decimal(row[3]),
                id=row[5],
            )
            for row in rows
        ]

    @staticmethod
    def _balance(obj: Mapping[str, Any], currency: str) -> CurrencyBalance:
        data = obj["data"]
        if data["coinType"] != currency:
            raise ShapeMismatchError(
                message="The requested coin type does not correspond to the coin type of the response",
                source_name=KUCOIN_ENVELOPE.name,
                reason=f"$.data.coinType: expected {currency!r}, got {data['coinType']!r}",
                value=obj,
            )
        all_amount = to_decimal(data["balance"])
        locked_amount = to_decimal(data["freezeBalance"])
        return CurrencyBalance(
            currency=currency,
            all_amount=all_amount,
            free_amount=all_amount - locked_amount,
            locked_amount=locked_amount,
        )

    @staticmethod
    def _order_info(data: Mapping[str, Any]) -> OrderInfo:
        pending_amount = to_decimal(data["pendingAmount"])
        deal_amount = to_decimal(data["dealAmount"])
        order = IdentifiedOrder(
            pair=CurrencyPair(data["coinType"], data["coinTypePair"]),
            order_type=parse_order_type(data["type"]),
            price=to_decimal(data["orderPrice"]),
            amount=pending_amount + deal_amount,
            id=data["orderOid"],
        )
        return OrderInfo(
            order=order,
            deal_amount=deal_amount,
            pending_amount=pending_amount,
            average_price=to_decimal(data["dealPriceAverage"]),
            created_at=datetime.fromtimestamp(data["createdAt"] / 1000, tz=timezone.utc),
            is_active=pending_amount > 0,
        )
