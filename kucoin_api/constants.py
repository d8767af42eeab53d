"""
KuCoin REST v1 - Endpoint catalogue.
"""

SERVER_PRODUCTION_URL = "https://api.kucoin.com"

# Public market data
LIST_EXCHANGE_RATE_OF_COINS_URI = "/v1/open/currencies"
LIST_LANGUAGES_URI = "/v1/open/lang-list"
TICK_URI = "/v1/open/tick"
ORDER_BOOKS_URI = "/v1/open/orders"
BUY_ORDER_BOOKS_URI = "/v1/open/orders-buy"
SELL_ORDER_BOOKS_URI = "/v1/open/orders-sell"
RECENTLY_DEAL_ORDERS_URI = "/v1/open/deal-orders"
LIST_TRADING_MARKETS_URI = "/v1/open/markets"
LIST_TRADING_SYMBOLS_TICK_URI = "/v1/market/open/symbols"
LIST_TRENDINGS_URI = "/v1/market/open/coins-trending"
GET_COIN_INFO_URI = "/v1/market/open/coin-info"
LIST_COINS_URI = "/v1/market/open/coins"

# TradingView UDF
TRADING_VIEW_KLINE_CONFIG_URI = "/v1/open/chart/config"
TRADING_VIEW_SYMBOL_TICK_URI = "/v1/open/chart/symbols"
TRADING_VIEW_KLINE_DATA_URI = "/v1/open/chart/history"

# Account (signed)
CREATE_ORDER_URI = "/v1/order"
DELETE_ORDER_URI = "/v1/cancel-order"
ORDER_INFO_URI = "/v1/order/detail"
ACTIVE_ORDERS_URI = "/v1/order/active"


def get_balance_of_coin_uri(coin: str) -> str:
    return f"/v1/account/{coin}/balance"


# Auth headers
API_KEY_HEADER = "KC-API-KEY"
API_NONCE_HEADER = "KC-API-NONCE"
API_SIGNATURE_HEADER = "KC-API-SIGNATURE"

SUCCESS_CODE = "OK"
