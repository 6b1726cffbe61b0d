"""API-key authentication for the verification endpoints."""

import secrets
from functools import lru_cache

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from config import get_settings

_header = APIKeyHeader(name="X-API-Key", auto_error=False)

_MAX_KEY_LENGTH = 256


@lru_cache
def service_key() -> str:
    """Return the configured service key, failing loudly when it is unset."""
    key = get_settings().api_key.get_secret_value().strip()
    if not key:
        raise RuntimeError(
            "ADDRESS_VERIFIER_API_KEY is not set or empty. "
            "The service cannot start without a configured API key."
        )
    return key


async def require_api_key(
    api_key: str | None = Security(_header),
) -> str:
    """Check the X-API-Key header: 401 when absent, 403 when wrong."""
    if api_key is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Provide an X-API-Key header.",
        )
    valid = len(api_key) <= _MAX_KEY_LENGTH and secrets.compare_digest(
        api_key.encode(), service_key().encode()
    )
    if not valid:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key.",
        )
    return api_key
