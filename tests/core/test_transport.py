"""
HTTP Transport Tests.

============================================================
PURPOSE
============================================================
TEST CATEGORIES:
- AiohttpTransport: 2xx body, non-2xx, network errors, timeouts
- clean_params()

============================================================
"""

import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest

from core.exceptions import TransportError
from core.transport import AiohttpTransport, clean_params


class FakeResponse:
    """Stands in for aiohttp's response context manager."""

    def __init__(self, status: int, text: str):
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


@pytest.fixture
def session():
    session = MagicMock()
    session.closed = False
    return session


# ============================================================
# AIOHTTP TRANSPORT
# ============================================================

class TestAiohttpTransport:
    """Tests for AiohttpTransport with a mocked session."""

    @pytest.mark.asyncio
    async def test_returns_body(self, session):
        session.request = MagicMock(return_value=FakeResponse(200, '{"ok": true}'))
        transport = AiohttpTransport(session=session)

        body = await transport.request("GET", "https://api.example.com/v1/x", params={"a": 1, "b": None})

        assert body == '{"ok": true}'
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://api.example.com/v1/x")
        assert kwargs["params"] == {"a": "1"}

    @pytest.mark.asyncio
    async def test_non_2xx_raises(self, session):
        session.request = MagicMock(return_value=FakeResponse(503, "Service Unavailable"))
        transport = AiohttpTransport(session=session, name="kucoin")

        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "https://api.example.com/v1/x")

        error = exc_info.value
        assert error.status_code == 503
        assert error.response_body == "Service Unavailable"
        assert error.source_name == "kucoin"

    @pytest.mark.asyncio
    async def test_client_error_raises_transport_error(self, session):
        cause = aiohttp.ClientConnectionError("refused")
        session.request = MagicMock(side_effect=cause)
        transport = AiohttpTransport(session=session)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "https://api.example.com/v1/x")

        assert exc_info.value.original_error is cause
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, session):
        session.request = MagicMock(side_effect=asyncio.TimeoutError())
        transport = AiohttpTransport(timeout_seconds=5, session=session)

        with pytest.raises(TransportError, match="Timed out"):
            await transport.request("GET", "https://api.example.com/v1/x")

    @pytest.mark.asyncio
    async def test_does_not_close_foreign_session(self, session):
        async with AiohttpTransport(session=session):
            pass

        session.close.assert_not_called()


class TestCleanParams:
    """Tests for clean_params()."""

    def test_drops_none_and_stringifies(self):
        assert clean_params({"a": None, "b": 2, "c": True, "d": "x"}) == {"b": "2", "c": "true", "d": "x"}

    def test_empty(self):
        assert clean_params(None) is None
        assert clean_params({"a": None}) is None
