"""FastAPI dependencies for authentication and resolver access."""

import os

from fastapi import Header, HTTPException, Request, status

from server.utils import redact_sensitive_headers
from utils.logger import get_logger

logger = get_logger(__name__)


async def get_api_key(request: Request, x_api_key: str | None = Header(None)):
    """
    Validate the X-API-Key header.

    The guard is only active when API_KEYS is set; a local voice front end
    can run without it.
    """
    valid_keys_str = os.getenv("API_KEYS", "")
    if not valid_keys_str.strip():
        return None

    request_id = getattr(request.state, "request_id", "unknown")
    valid_keys = [k.strip() for k in valid_keys_str.split(",") if k.strip()]

    if not x_api_key or x_api_key not in valid_keys:
        logger.warning(
            "API authentication failed",
            extra={
                "extra_fields": {
                    "request_id": request_id,
                    "headers": redact_sensitive_headers(dict(request.headers)),
                }
            },
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API key"
        )

    return x_api_key


def get_resolver():
    """Dependency to get the resolver instance (singleton pattern)."""
    from orchestrator.factory import create_resolver

    if not hasattr(get_resolver, "_instance"):
        get_resolver._instance = create_resolver()
    return get_resolver._instance
