"""
Exchange Services - Base Interfaces.

============================================================
RESPONSIBILITY
============================================================
Common contract of every exchange service, and the request
pipeline they share.

- RestExchangeService: public market data
- AuthenticatedRestExchangeService: account operations
- BaseExchangeService: request -> parse -> retry -> unwrap

============================================================
REQUEST PIPELINE
============================================================
One attempt = build headers, send, parse into a
ResponseResult. Attempts run under BoundedRetry with
``config.request_try_count`` as the bound, so a failed
transport call or a body of unknown shape is retried.

Two outcomes settle the wrapper on the first attempt and
are raised only afterwards:

- ErrorResponse: the exchange reported an error, raised as
  ApplicationError
- MalformedResponseError: the body is not JSON at all

============================================================
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar, Union

from core.envelope import ResponseResult
from core.exceptions import MalformedResponseError
from core.models import CurrencyBalance, CurrencyPair, IdentifiedOrder, Order, OrderBook, OrderInfo
from core.retry import BoundedRetry
from core.transport import AiohttpTransport, HttpTransport
from exchange_services.config import ServiceConfig
from exchange_services.logging_utils import mask_headers, mask_params


logger = logging.getLogger(__name__)

T = TypeVar("T")


# ============================================================
# INTERFACES
# ============================================================

class RestExchangeService(ABC):
    """Public market data of an exchange."""

    @abstractmethod
    async def get_order_book(self, pair: CurrencyPair, max_limit: Optional[int] = None) -> OrderBook:
        """
        Get the order book of a pair.

        Raises:
            ApplicationError: Exchange rejected the request
            TransportError: Last attempt failed in transport
            ResponseError: Last attempt returned an unknown shape
        """
        pass

    @abstractmethod
    async def get_trades(self, pair: CurrencyPair, max_limit: Optional[int] = None) -> List[Order]:
        """Get the most recent trades of a pair."""
        pass


class AuthenticatedRestExchangeService(ABC):
    """Account operations; every call carries credentials."""

    @abstractmethod
    async def create_order(self, order: Order, credentials: Any) -> IdentifiedOrder:
        pass

    @abstractmethod
    async def delete_order(self, order: IdentifiedOrder, credentials: Any) -> None:
        pass

    @abstractmethod
    async def get_order_info(self, order: IdentifiedOrder, credentials: Any) -> OrderInfo:
        pass

    @abstractmethod
    async def get_active_orders(self, pair: CurrencyPair, credentials: Any) -> List[IdentifiedOrder]:
        pass

    @abstractmethod
    async def get_balance(self, currency: str, credentials: Any) -> CurrencyBalance:
        pass


# ============================================================
# BASE SERVICE
# ============================================================

class BaseExchangeService:
    """Shared transport handling and retried request pipeline."""

    name = "exchange"

    def __init__(
        self,
        config: ServiceConfig,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport or AiohttpTransport(
            timeout_seconds=config.timeout_seconds,
            name=self.name,
        )

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def server_uri(self) -> str:
        return self._config.server_uri

    @property
    def request_try_count(self) -> int:
        return self._config.request_try_count

    async def _call(
        self,
        method: str,
        path: str,
        parse: Callable[[str], ResponseResult[T]],
        params: Optional[Dict[str, Any]] = None,
        headers_factory: Optional[Callable[[], Mapping[str, str]]] = None,
    ) -> T:
        """
        Run one request through the retried pipeline.

        Args:
            method: HTTP method
            path: Endpoint path relative to the server URI
            parse: Body -> ResponseResult of domain objects
            params: Query parameters (None values are dropped)
            headers_factory: Called once per attempt, so signed
                headers get a fresh nonce every time

        Returns:
            The parsed success payload

        Raises:
            ApplicationError: The exchange answered with an error envelope
            MalformedResponseError: The body is not JSON (never retried)
            Exception: The last attempt's failure, after exhaustion
        """
        url = f"{self.server_uri}{path}"

        async def attempt() -> Union[ResponseResult[T], MalformedResponseError]:
            headers = headers_factory() if headers_factory else None
            logger.debug(
                f"[{self.name}] {method} {url} "
                f"params={mask_params(params)} headers={mask_headers(headers)}"
            )
            raw = await self._transport.request(method, url, params=params, headers=headers)
            try:
                return parse(raw)
            except MalformedResponseError as e:
                return e

        result = await BoundedRetry(
            attempt,
            max_attempts=self.request_try_count,
            name=f"{self.name} {method} {path}",
        ).result()

        if isinstance(result, MalformedResponseError):
            logger.error(f"[{self.name}] {method} {path} returned a malformed body: {(result.raw_body or '')[:200]!r}")
            raise result
        if result.is_error:
            logger.warning(f"[{self.name}] {method} {path} rejected: {result.code} {result.message}")
        return result.unwrap()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(server_uri={self.server_uri}, "
            f"request_try_count={self.request_try_count})>"
        )
