"""
KuCoin Service - Request Signing.

String to sign::

    <endpoint>/<nonce>/<query string>

where the query string is the ``k=v`` pairs sorted by key
and joined with ``&``. The string is Base64-encoded and the
signature is the hex HMAC-SHA256 of that, keyed by the
secret.
"""

import base64
import hashlib
import hmac
from typing import Any, Mapping, Optional, Union

from core.transport import clean_params


class KuCoinSignatureMaker:
    """Computes KC-API-SIGNATURE values."""

    def sign(
        self,
        secret: str,
        endpoint: str,
        query: Optional[Union[str, Mapping[str, Any]]],
        nonce: int,
    ) -> str:
        string_to_sign = f"{endpoint}/{nonce}/{self.query_string(query)}"
        encoded = base64.b64encode(string_to_sign.encode("utf-8"))
        return hmac.new(secret.encode("utf-8"), encoded, hashlib.sha256).hexdigest()

    @staticmethod
    def query_string(query: Optional[Union[str, Mapping[str, Any]]]) -> str:
        """Canonical query string; values are stringified exactly as they are sent."""
        if query is None:
            return ""
        if isinstance(query, str):
            return query
        cleaned = clean_params(query) or {}
        return "&".join(f"{key}={cleaned[key]}" for key in sorted(cleaned))
