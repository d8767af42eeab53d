"""
KuCoin REST v1 - Response types.

Static shapes of the decoded responses. Every success type
extends KuCoinSuccessResponseResult; its ``data`` member is
what the matching GuardsMap in kucoin_api.guards checks.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Tuple, TypedDict, Union


class KuCoinOrderType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


# ============================================================
# ENVELOPES
# ============================================================

class KuCoinResponseResult(TypedDict):
    success: bool
    code: str


class KuCoinErrorResponseResult(TypedDict):
    success: Literal[False]
    code: str
    msg: str


class KuCoinSuccessResponseResult(TypedDict):
    success: Literal[True]
    code: Literal["OK"]


# ============================================================
# MARKET DATA
# ============================================================

# price, amount, volume
KuCoinOrderBookOrder = Tuple[float, float, float]

# timestamp, type, price, amount, volume
KuCoinDealOrder = Tuple[int, str, float, float, float]


class KuCoinOrderBooksData(TypedDict):
    _comment: str
    BUY: List[KuCoinOrderBookOrder]
    SELL: List[KuCoinOrderBookOrder]
    timestamp: int


class KuCoinOrderBooks(KuCoinSuccessResponseResult):
    data: KuCoinOrderBooksData


class KuCoinBuyOrderBooks(KuCoinSuccessResponseResult):
    data: List[KuCoinOrderBookOrder]


class KuCoinSellOrderBooks(KuCoinSuccessResponseResult):
    data: List[KuCoinOrderBookOrder]


class KuCoinRecentlyDealOrders(KuCoinSuccessResponseResult):
    data: List[KuCoinDealOrder]


class KuCoinExchangeRates(TypedDict):
    currencies: List[List[str]]
    rates: Dict[str, Dict[str, float]]


class KuCoinListExchangeRateOfCoins(KuCoinSuccessResponseResult):
    data: KuCoinExchangeRates


class KuCoinListLanguages(KuCoinSuccessResponseResult):
    # locale, display name, enabled
    data: List[Tuple[str, str, bool]]


class KuCoinTickData(TypedDict):
    coinType: str
    coinTypePair: str
    symbol: str
    trading: bool
    lastDealPrice: float
    buy: float
    sell: float
    high: float
    low: float
    vol: float
    volValue: float
    change: float
    changeRate: float
    feeRate: float
    sort: int
    datetime: int


class KuCoinTick(KuCoinSuccessResponseResult):
    data: KuCoinTickData


class KuCoinAllCoinsTick(KuCoinSuccessResponseResult):
    data: List[KuCoinTickData]


class KuCoinListTradingMarkets(KuCoinSuccessResponseResult):
    data: List[str]


class KuCoinListTradingSymbolsTick(KuCoinSuccessResponseResult):
    data: List[KuCoinTickData]


class KuCoinTrending(TypedDict):
    coinPair: str
    # timestamp, price
    deals: List[Tuple[int, float]]


class KuCoinListTrendings(KuCoinSuccessResponseResult):
    data: List[KuCoinTrending]


class KuCoinCoinInfoData(TypedDict):
    coin: str
    name: str
    tradePrecision: int
    withdrawMinFee: float
    withdrawMinAmount: float
    withdrawFeeRate: float
    confirmationCount: int
    enableWithdraw: bool
    enableDeposit: bool
    depositRemark: str
    withdrawRemark: str


class KuCoinCoinInfo(KuCoinSuccessResponseResult):
    data: KuCoinCoinInfoData


class KuCoinListCoins(KuCoinSuccessResponseResult):
    data: List[KuCoinCoinInfoData]


class KuCoinTradingViewKLineConfig(TypedDict):
    supports_marks: bool
    supports_time: bool
    supports_search: bool
    supports_group_request: bool
    supported_resolutions: List[str]


class KuCoinTradingViewSymbolTick(TypedDict):
    name: str
    ticker: str
    description: str
    type: str
    session: str
    timezone: str
    minmov: int
    pricescale: int
    has_intraday: bool
    supported_resolutions: List[str]


# ============================================================
# ACCOUNT
# ============================================================

class KuCoinBalanceData(TypedDict):
    coinType: str
    balance: float
    freezeBalance: float


class KuCoinBalance(KuCoinSuccessResponseResult):
    data: KuCoinBalanceData


class KuCoinCreatedOrderData(TypedDict):
    orderOid: str


class KuCoinCreatedOrder(KuCoinSuccessResponseResult):
    data: KuCoinCreatedOrderData


# timestamp, type, price, amount, dealAmount, orderOid
KuCoinActiveOrder = Tuple[int, str, float, float, float, str]


class KuCoinActiveOrdersData(TypedDict):
    BUY: List[KuCoinActiveOrder]
    SELL: List[KuCoinActiveOrder]


class KuCoinActiveOrders(KuCoinSuccessResponseResult):
    data: KuCoinActiveOrdersData


class KuCoinOrderInfoData(TypedDict):
    orderOid: str
    type: str
    coinType: str
    coinTypePair: str
    orderPrice: float
    pendingAmount: float
    dealAmount: float
    dealPriceAverage: float
    createdAt: int


class KuCoinOrderInfo(KuCoinSuccessResponseResult):
    data: KuCoinOrderInfoData


# A checked operation returns either variant; with a selector the
# success variant is only guaranteed on the selected fields.
KuCoinTypeCheckedOperationResult = Union[Mapping[str, Any], KuCoinErrorResponseResult]
