"""
Exchange Services - Secure Logging Utilities.

============================================================
SECURITY REQUIREMENTS
============================================================
1. NEVER log raw API keys, secrets, nonces or signatures
2. Mask sensitive headers (KC-API-KEY, KC-API-SIGNATURE, ...)
3. Mask sensitive query parameters

============================================================
"""

import re
from typing import Any, Dict, Mapping, Optional


# Header names that should be masked (compared lowercased)
SENSITIVE_HEADERS = {
    "authorization",
    "kc-api-key",
    "kc-api-nonce",
    "kc-api-signature",
    "kc-api-passphrase",
    "key",
    "sign",
}

# Parameter names that should be masked (compared lowercased)
SENSITIVE_PARAMS = {
    "apikey",
    "api_key",
    "secret",
    "nonce",
    "signature",
    "sign",
}

# Hex HMAC digests
_HMAC_PATTERN = re.compile(r"\b[a-f0-9]{64}\b", re.IGNORECASE)


def mask_value(value: str, show_chars: int = 4) -> str:
    """
    Mask a sensitive value, showing only the first few chars.

    Returns ``***`` for values too short to partially reveal.
    """
    if not value or len(value) <= show_chars:
        return "***"
    return f"{value[:show_chars]}...***"


def mask_headers(headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Copy of ``headers`` with sensitive values masked."""
    if not headers:
        return {}

    masked = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = mask_value(str(value))
        else:
            masked[key] = value
    return masked


def mask_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy of ``params`` with sensitive values masked."""
    if not params:
        return {}

    masked: Dict[str, Any] = {}
    for key, value in params.items():
        if key.lower() in SENSITIVE_PARAMS:
            masked[key] = mask_value(str(value)) if value else value
        elif isinstance(value, Mapping):
            masked[key] = mask_params(value)
        elif isinstance(value, str):
            masked[key] = _HMAC_PATTERN.sub("***HMAC***", value)
        else:
            masked[key] = value
    return masked
