"""
Core Module - HTTP Transport.

============================================================
RESPONSIBILITY
============================================================
Issues GET/POST requests and hands back the raw text body.

- Never decodes or validates the body
- Maps every failure before a 2xx body arrives to
  TransportError (network error, non-2xx, timeout)
- Reuses one aiohttp session per transport

============================================================
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

import aiohttp

from core.exceptions import TransportError


logger = logging.getLogger(__name__)


class HttpTransport(ABC):
    """Abstract "issue a request, receive a text body or an error" capability."""

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Send a request.

        Returns:
            Response body as text

        Raises:
            TransportError: If no 2xx body was received
        """
        pass

    async def close(self) -> None:
        """Release resources."""

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class AiohttpTransport(HttpTransport):
    """HttpTransport backed by aiohttp."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
        name: str = "http",
    ) -> None:
        self._timeout = timeout_seconds
        self._session = session
        self._owns_session = session is None
        self._name = name

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers=self._get_default_headers(),
            )
            self._owns_session = True
        return self._session

    def _get_default_headers(self) -> dict[str, str]:
        """Get default HTTP headers."""
        return {
            "Accept": "application/json",
        }

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        session = await self._get_session()

        start_time = time.time()
        try:
            async with session.request(
                method,
                url,
                params=clean_params(params),
                headers=dict(headers) if headers else None,
            ) as response:
                body = await response.text()
                latency_ms = (time.time() - start_time) * 1000

                if response.status >= 300:
                    raise TransportError(
                        message=f"HTTP {response.status}",
                        source_name=self._name,
                        status_code=response.status,
                        response_body=body[:1000],
                        request_url=url,
                    )

                logger.debug(f"[{self._name}] {method} {url} completed in {latency_ms:.1f}ms")
                return body

        except aiohttp.ClientError as e:
            raise TransportError(
                message=f"Connection error: {e}",
                source_name=self._name,
                request_url=url,
                original_error=e,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(
                message=f"Timed out after {self._timeout}s",
                source_name=self._name,
                request_url=url,
                original_error=e,
            )

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self._name}, timeout={self._timeout})>"


def clean_params(params: Optional[Mapping[str, Any]]) -> Optional[dict[str, str]]:
    """Drop None values and stringify the rest, as aiohttp requires."""
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        else:
            cleaned[key] = str(value)
    return cleaned or None
