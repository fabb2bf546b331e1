"""Redaction of sensitive headers and body fields before they are logged."""

from collections.abc import Iterable
from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "api_key",
    "apikey",
    "token",
    "secret",
    "password",
    "access_key",
    "access_token",
    "refresh_token",
    "authorization",
    "auth_token",
    "private_key",
    "secret_key",
    "credentials",
    "client_secret",
})

REDACT_HEADERS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "x-auth-token",
})

REDACTED_VALUE = "[REDACTED]"


def redact_payload(payload: dict[str, Any], *, skip_redaction: bool = False) -> dict[str, Any]:
    """Recursively redact sensitive keys from a decoded request or response body.

    The original payload is never mutated.

    Args:
        payload: The dictionary to redact sensitive values from.
        skip_redaction: If True, returns a copy without redacting.

    Returns:
        A new dictionary with sensitive values replaced by "[REDACTED]".
    """
    if skip_redaction:
        return _deep_copy(payload)
    return _redact_recursive(payload)


def redact_headers(
    headers: Iterable[tuple[str, str]], *, skip_redaction: bool = False
) -> dict[str, str]:
    """Redact credential-bearing headers.

    Args:
        headers: Header pairs, e.g. ``request.headers.items()``.
        skip_redaction: If True, returns the headers unchanged.

    Returns:
        A new dict of header values with sensitive ones replaced.
    """
    result = {}
    for name, value in headers:
        if not skip_redaction and name.lower() in REDACT_HEADERS:
            result[name] = REDACTED_VALUE
        else:
            result[name] = value
    return result


def _redact_recursive(obj: Any) -> Any:
    """Recursively redact sensitive keys."""
    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            key_lower = key.lower() if isinstance(key, str) else key
            if key_lower in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = _redact_recursive(value)
        return result
    elif isinstance(obj, list):
        return [_redact_recursive(item) for item in obj]
    else:
        return obj


def _deep_copy(obj: Any) -> Any:
    """Create a deep copy of a JSON-serializable object."""
    if isinstance(obj, dict):
        return {key: _deep_copy(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_deep_copy(item) for item in obj]
    else:
        return obj
