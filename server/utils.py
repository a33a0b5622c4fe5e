"""Shared utilities for FastAPI routes."""

from collections.abc import Mapping

# Headers that can carry the HTTP guard key or an upstream credential
SENSITIVE_HEADERS = frozenset({"x-api-key", "authorization", "proxy-authorization", "cookie"})

REDACTED = "[REDACTED]"


def redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy ``headers`` for logging with credential-bearing values masked."""
    return {
        key: REDACTED if key.lower() in SENSITIVE_HEADERS and value else value
        for key, value in headers.items()
    }
