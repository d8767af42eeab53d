"""
Core Module - TradingView UDF Shapes.

Several exchanges expose candles through the TradingView UDF
protocol. Bars come as parallel arrays; errors as
``{"s": "error", "errmsg": ...}``.
"""

from typing import List, Literal, TypedDict

from core.envelope import EnvelopeSpec
from core.guards import ArrayRule, equals, is_list, is_number, is_str


class TradingViewBarsArrays(TypedDict):
    s: Literal["ok"]
    t: List[int]
    o: List[float]
    h: List[float]
    l: List[float]  # noqa: E741
    c: List[float]
    v: List[float]


class TradingViewError(TypedDict):
    s: Literal["error"]
    errmsg: str


_NUMBERS = ArrayRule(this=is_list, every=is_number)

TRADING_VIEW_BARS_ARRAYS_GUARDS_MAP = {
    "t": _NUMBERS,
    "o": _NUMBERS,
    "h": _NUMBERS,
    "l": _NUMBERS,
    "c": _NUMBERS,
    "v": _NUMBERS,
}

TRADING_VIEW_ERROR_GUARDS_MAP = {
    "s": equals("error"),
    "errmsg": is_str,
}

TRADING_VIEW_ENVELOPE = EnvelopeSpec(
    name="tradingview",
    discriminator={"s": is_str},
    is_error=lambda obj: obj["s"] == "error",
    error_shape=TRADING_VIEW_ERROR_GUARDS_MAP,
    success_shape={"s": equals("ok")},
    message_key="errmsg",
)
