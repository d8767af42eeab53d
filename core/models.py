"""
Core Module - Normalized Domain Model.

Exchange-independent types every service returns. No
downstream code depends on exchange-specific fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, NamedTuple, Optional


class OrderType(Enum):
    """Side of an order."""
    BUY = "buy"
    SELL = "sell"


class CurrencyPair(NamedTuple):
    """Traded pair; ``pair[0]`` is the base currency, ``pair[1]`` the quote."""
    base: str
    quote: str

    def __str__(self) -> str:
        return f"{self.base}/{self.quote}"


def to_decimal(value: Any) -> Decimal:
    """Convert a decoded JSON number to Decimal without float artifacts."""
    return Decimal(str(value))


@dataclass(frozen=True)
class Order:
    """An order at a price level, or a trade."""
    pair: CurrencyPair
    order_type: OrderType
    price: Decimal
    amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "pair": list(self.pair),
            "order_type": self.order_type.value,
            "price": str(self.price),
            "amount": str(self.amount),
        }


@dataclass(frozen=True)
class IdentifiedOrder(Order):
    """An order known to the exchange under ``id``."""
    id: str


@dataclass(frozen=True)
class OrderBook:
    """Buy and sell sides of a market."""
    buy_orders: list[Order] = field(default_factory=list)
    sell_orders: list[Order] = field(default_factory=list)


@dataclass(frozen=True)
class CurrencyBalance:
    """Balance of one currency on an account."""
    currency: str
    all_amount: Decimal
    free_amount: Decimal
    locked_amount: Decimal


@dataclass(frozen=True)
class OrderInfo:
    """Execution state of a placed order."""
    order: IdentifiedOrder
    deal_amount: Decimal
    pending_amount: Decimal
    average_price: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    is_active: bool = True
