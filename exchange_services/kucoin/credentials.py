"""
KuCoin Service - Credentials.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from core.exceptions import ConfigurationError
from exchange_services.logging_utils import mask_value


@dataclass(frozen=True)
class KuCoinExchangeCredentials:
    """API key pair. Never printed in clear."""

    api_key: str
    secret: str

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigurationError("KuCoin api_key is required", config_key="api_key")
        if not self.secret:
            raise ConfigurationError("KuCoin secret is required", config_key="secret")

    @classmethod
    def from_env(cls) -> "KuCoinExchangeCredentials":
        """Load credentials from KUCOIN_API_KEY / KUCOIN_API_SECRET (after ``.env``)."""
        load_dotenv()
        return cls(
            api_key=os.getenv("KUCOIN_API_KEY", ""),
            secret=os.getenv("KUCOIN_API_SECRET", ""),
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(api_key={mask_value(self.api_key)!r}, "
            f"secret={mask_value(self.secret, show_chars=0)!r})"
        )
