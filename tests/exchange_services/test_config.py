"""
Service Configuration and Log Masking Tests.

Scenarios:
- ServiceConfig fails fast on bad values
- ServiceConfig.from_env reads prefixed variables
- Masking of headers and parameters
"""

import pytest

from core.exceptions import ConfigurationError
from exchange_services.config import ServiceConfig
from exchange_services.logging_utils import mask_headers, mask_params, mask_value


class TestServiceConfig:
    """Tests for ServiceConfig."""

    def test_defaults(self):
        config = ServiceConfig("https://api.kucoin.com")

        assert config.request_try_count == 3
        assert config.timeout_seconds > 0

    def test_zero_try_count_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ServiceConfig("https://api.kucoin.com", request_try_count=0)

        assert exc_info.value.config_key == "request_try_count"

    @pytest.mark.parametrize("server_uri", ["api.kucoin.com", "ws://api.kucoin.com", ""])
    def test_non_http_uri_rejected(self, server_uri):
        with pytest.raises(ConfigurationError):
            ServiceConfig(server_uri)

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ConfigurationError):
            ServiceConfig("https://yobit.net", timeout_seconds=0)

    def test_frozen(self):
        config = ServiceConfig("https://yobit.net")

        with pytest.raises(AttributeError):
            config.request_try_count = 5

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("YOBIT_SERVER_URI", "https://yobit.test")
        monkeypatch.setenv("YOBIT_REQUEST_TRY_COUNT", "1")
        monkeypatch.setenv("YOBIT_TIMEOUT_SECONDS", "2.5")

        config = ServiceConfig.from_env("yobit", "https://yobit.net")

        assert config == ServiceConfig("https://yobit.test", request_try_count=1, timeout_seconds=2.5)

    def test_from_env_defaults(self, monkeypatch):
        for name in ("SERVER_URI", "REQUEST_TRY_COUNT", "TIMEOUT_SECONDS"):
            monkeypatch.delenv(f"YOBIT_{name}", raising=False)

        config = ServiceConfig.from_env("YOBIT", "https://yobit.net")

        assert config.server_uri == "https://yobit.net"
        assert config.request_try_count == 3

    def test_from_env_invalid_number(self, monkeypatch):
        monkeypatch.setenv("KUCOIN_REQUEST_TRY_COUNT", "three")

        with pytest.raises(ConfigurationError):
            ServiceConfig.from_env("KUCOIN", "https://api.kucoin.com")


class TestMasking:
    """Tests for log masking helpers."""

    def test_mask_value(self):
        assert mask_value("abcdefgh") == "abcd...***"
        assert mask_value("abc") == "***"
        assert mask_value("") == "***"

    def test_mask_headers(self):
        headers = {"KC-API-KEY": "5b2f0e1a9c3d", "KC-API-SIGNATURE": "f" * 64, "Accept": "application/json"}

        masked = mask_headers(headers)

        assert masked["KC-API-KEY"] == "5b2f...***"
        assert masked["KC-API-SIGNATURE"] == "ffff...***"
        assert masked["Accept"] == "application/json"
        assert mask_headers(None) == {}

    def test_mask_params(self):
        masked = mask_params({"symbol": "ETH-BTC", "secret": "topsecret", "note": "sig " + "a" * 64, "limit": 5})

        assert masked["symbol"] == "ETH-BTC"
        assert masked["secret"] == "tops...***"
        assert masked["note"] == "sig ***HMAC***"
        assert masked["limit"] == 5
