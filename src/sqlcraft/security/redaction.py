"""Masking of secrets in bound values and DSN options before they reach logs."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

REDACTED_VALUE = "***"

# Long binds (documents, blobs) are cut down so a single query can't flood the log.
MAX_LOGGED_LENGTH = 200

_SENSITIVE_KEYS = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "apikey",
    "accesskey",
    "secretkey",
    "privatekey",
    "sslkey",
    "sslcert",
    "sslrootcert",
    "sslca",
)

_SENSITIVE_MARKERS = (
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "private_key",
    "bearer",
    "authorization",
)


def _compact(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


def is_sensitive_key(key: str) -> bool:
    compact = _compact(key)
    return any(token in compact for token in _SENSITIVE_KEYS)


def is_sensitive_value(value: str) -> bool:
    lowered = value.lower()
    return any(marker in lowered for marker in _SENSITIVE_MARKERS)


def redact_query_params(query: Mapping[str, str]) -> dict[str, str]:
    return {key: REDACTED_VALUE if is_sensitive_key(key) else val for key, val in query.items()}


def redact_value(value: Any, *, key: str | None = None) -> Any:
    if key is not None and is_sensitive_key(key):
        return REDACTED_VALUE
    if isinstance(value, Mapping):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, tuple):
        return tuple(redact_value(item) for item in value)
    if isinstance(value, list):
        return [redact_value(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        if len(value) > MAX_LOGGED_LENGTH:
            return f"<{len(value)} bytes>"
        decoded = bytes(value).decode("utf-8", errors="ignore")
        return REDACTED_VALUE if decoded and is_sensitive_value(decoded) else value
    if isinstance(value, str):
        if is_sensitive_value(value):
            return REDACTED_VALUE
        if len(value) > MAX_LOGGED_LENGTH:
            return value[:MAX_LOGGED_LENGTH] + "..."
    return value


def redact_binds(binds: Iterable[Any]) -> list[Any]:
    """
    Copy of ``binds`` safe to log; the original list is never modified.
    """
    return [redact_value(value) for value in binds]
