"""
KuCoin REST v1 - GuardsMaps.

Envelope maps check the outer ``success``/``code``/``msg``
wrapper. Entity maps check only the payload (``data``); the
envelope is checked first by KUCOIN_ENVELOPE.
"""

from typing import Any

from core.envelope import EnvelopeSpec
from core.guards import (
    ArrayRule,
    equals,
    is_bool,
    is_int,
    is_list,
    is_number,
    is_str,
    list_of,
    mapping_of,
    one_of,
    optional,
    tuple_of,
)
from kucoin_api.constants import SUCCESS_CODE
from kucoin_api.types import KuCoinOrderType


# ============================================================
# ENVELOPES
# ============================================================

KUCOIN_RESPONSE_RESULT_GUARDS_MAP = {
    "success": is_bool,
    "code": is_str,
}

KUCOIN_ERROR_RESPONSE_RESULT_GUARDS_MAP = {
    "success": equals(False),
    "code": is_str,
    "msg": is_str,
}

KUCOIN_SUCCESS_RESPONSE_RESULT_GUARDS_MAP = {
    "success": equals(True),
    "code": equals(SUCCESS_CODE),
}

KUCOIN_ENVELOPE = EnvelopeSpec(
    name="kucoin",
    discriminator=KUCOIN_RESPONSE_RESULT_GUARDS_MAP,
    is_error=lambda obj: obj["success"] is False,
    error_shape=KUCOIN_ERROR_RESPONSE_RESULT_GUARDS_MAP,
    success_shape=KUCOIN_SUCCESS_RESPONSE_RESULT_GUARDS_MAP,
    code_key="code",
    message_key="msg",
)


def is_kucoin_order_type(value: Any) -> bool:
    return value in (KuCoinOrderType.BUY.value, KuCoinOrderType.SELL.value)


# ============================================================
# MARKET DATA
# ============================================================

is_order_book_order = tuple_of(is_number, is_number, is_number)
is_deal_order = tuple_of(is_int, is_kucoin_order_type, is_number, is_number, is_number)

_ORDER_BOOK_SIDE = ArrayRule(this=is_list, every=is_order_book_order)

KUCOIN_ORDER_BOOKS_GUARDS_MAP = {
    "data": {
        "_comment": is_str,
        "BUY": _ORDER_BOOK_SIDE,
        "SELL": _ORDER_BOOK_SIDE,
        "timestamp": is_int,
    },
}

KUCOIN_BUY_ORDER_BOOKS_GUARDS_MAP = {
    "data": _ORDER_BOOK_SIDE,
}

KUCOIN_SELL_ORDER_BOOKS_GUARDS_MAP = {
    "data": _ORDER_BOOK_SIDE,
}

KUCOIN_RECENTLY_DEAL_ORDERS_GUARDS_MAP = {
    "data": ArrayRule(this=is_list, every=is_deal_order),
}

KUCOIN_LIST_EXCHANGE_RATE_OF_COINS_GUARDS_MAP = {
    "data": {
        "currencies": ArrayRule(this=is_list, every=list_of(is_str)),
        "rates": mapping_of(mapping_of(is_number)),
    },
}

KUCOIN_LIST_LANGUAGES_GUARDS_MAP = {
    "data": ArrayRule(this=is_list, every=tuple_of(is_str, is_str, is_bool)),
}

KUCOIN_TICK_DATA_GUARDS_MAP = {
    "coinType": is_str,
    "coinTypePair": is_str,
    "symbol": is_str,
    "trading": is_bool,
    "lastDealPrice": is_number,
    "buy": is_number,
    "sell": is_number,
    "high": is_number,
    "low": is_number,
    "vol": is_number,
    "volValue": is_number,
    "change": is_number,
    "changeRate": is_number,
    "feeRate": is_number,
    "sort": is_int,
    "datetime": is_int,
}

KUCOIN_TICK_GUARDS_MAP = {
    "data": KUCOIN_TICK_DATA_GUARDS_MAP,
}

KUCOIN_ALL_COINS_TICK_GUARDS_MAP = {
    "data": ArrayRule(this=is_list, every=KUCOIN_TICK_DATA_GUARDS_MAP),
}

KUCOIN_LIST_TRADING_MARKETS_GUARDS_MAP = {
    "data": ArrayRule(this=is_list, every=is_str),
}

KUCOIN_LIST_TRADING_SYMBOLS_TICK_GUARDS_MAP = {
    "data": ArrayRule(this=is_list, every=KUCOIN_TICK_DATA_GUARDS_MAP),
}

KUCOIN_LIST_TRENDINGS_GUARDS_MAP = {
    "data": ArrayRule(
        this=is_list,
        every={
            "coinPair": is_str,
            "deals": ArrayRule(this=is_list, every=tuple_of(is_int, is_number)),
        },
    ),
}

KUCOIN_COIN_INFO_DATA_GUARDS_MAP = {
    "coin": is_str,
    "name": is_str,
    "tradePrecision": is_int,
    "withdrawMinFee": is_number,
    "withdrawMinAmount": is_number,
    "withdrawFeeRate": is_number,
    "confirmationCount": is_int,
    "enableWithdraw": is_bool,
    "enableDeposit": is_bool,
    "depositRemark": optional(is_str),
    "withdrawRemark": optional(is_str),
}

KUCOIN_COIN_INFO_GUARDS_MAP = {
    "data": KUCOIN_COIN_INFO_DATA_GUARDS_MAP,
}

KUCOIN_LIST_COINS_GUARDS_MAP = {
    "data": ArrayRule(this=is_list, every=KUCOIN_COIN_INFO_DATA_GUARDS_MAP),
}


# ============================================================
# TRADINGVIEW (no envelope)
# ============================================================

KUCOIN_TRADING_VIEW_KLINE_CONFIG_GUARDS_MAP = {
    "supports_marks": is_bool,
    "supports_time": is_bool,
    "supports_search": is_bool,
    "supports_group_request": is_bool,
    "supported_resolutions": ArrayRule(this=is_list, every=is_str),
}

KUCOIN_TRADING_VIEW_SYMBOL_TICK_GUARDS_MAP = {
    "name": is_str,
    "ticker": is_str,
    "description": is_str,
    "type": is_str,
    "session": is_str,
    "timezone": is_str,
    "minmov": is_number,
    "pricescale": is_number,
    "has_intraday": is_bool,
    "supported_resolutions": ArrayRule(this=is_list, every=is_str),
}


# ============================================================
# ACCOUNT
# ============================================================

KUCOIN_BALANCE_GUARDS_MAP = {
    "data": {
        "coinType": is_str,
        "balance": is_number,
        "freezeBalance": is_number,
    },
}

KUCOIN_CREATED_ORDER_GUARDS_MAP = {
    "data": {
        "orderOid": is_str,
    },
}

# Cancellation reports success through the envelope alone.
KUCOIN_DELETED_ORDER_GUARDS_MAP: dict = {}

is_active_order = tuple_of(is_int, is_kucoin_order_type, is_number, is_number, is_number, is_str)

_ACTIVE_ORDERS_SIDE = ArrayRule(this=is_list, every=is_active_order)

KUCOIN_ACTIVE_ORDERS_GUARDS_MAP = {
    "data": {
        "BUY": _ACTIVE_ORDERS_SIDE,
        "SELL": _ACTIVE_ORDERS_SIDE,
    },
}

KUCOIN_ORDER_INFO_GUARDS_MAP = {
    "data": {
        "orderOid": is_str,
        "type": one_of(KuCoinOrderType.BUY.value, KuCoinOrderType.SELL.value),
        "coinType": is_str,
        "coinTypePair": is_str,
        "orderPrice": is_number,
        "pendingAmount": is_number,
        "dealAmount": is_number,
        "dealPriceAverage": is_number,
        "createdAt": is_int,
    },
}
